"""Shared fixtures for yamlskript tests."""

import pytest

from yamlskript.codegen import Diagnostics, create_emitters
from yamlskript.config import EmitOptions


@pytest.fixture
def options():
    return EmitOptions()


@pytest.fixture
def diagnostics():
    return Diagnostics("test.yml")


@pytest.fixture
def emitters(options, diagnostics):
    """Statement, expression and markup emitters sharing one diagnostics collector."""
    return create_emitters(options, diagnostics)


@pytest.fixture
def statements(emitters):
    return emitters[0]


@pytest.fixture
def expressions(emitters):
    return emitters[1]


@pytest.fixture
def markup(emitters):
    return emitters[2]


COUNTER_DOCUMENT = """
modules:
  - type: named
    alias: formatDate, parseDate as parse
    path: ./dates
css:
  - ./counter.css
variables:
  count: 0
objects:
  settings:
    step: 1
    label: Counter
functions:
  - name: increment
    parameters: [value]
    body:
      - type: returnStatement
        argument: value + settings.step
components:
  - type: function
    name: Counter
    hooks:
      - name: useState
        params: [count, setCount]
        initial: 0
    jsx:
      - type: div
        props:
          class: counter
        children:
          - type: button
            props:
              onClick: "{{() => setCount(increment(count))}}"
            children:
              - "{{count}}"
"""


@pytest.fixture
def counter_document():
    return COUNTER_DOCUMENT
