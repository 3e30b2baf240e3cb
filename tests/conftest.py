"""Pytest configuration and shared fixtures for rackml tests."""

import pytest

from rackml import Parser, RackDiagramGenerator, RackLayoutEngine


@pytest.fixture
def single_unit_input():
    """One rack, one unit tall, holding a single server."""
    return """
    <racks>
      <rack name="Solo" height="1">
        <server>web-01</server>
      </rack>
    </racks>
    """


@pytest.fixture
def stacked_input():
    """A switch declared above a two-unit server in a ten-unit rack."""
    return """
    <racks>
      <rack name="Core" height="10">
        <switch>sw-01</switch>
        <server height="2">db-01</server>
      </rack>
    </racks>
    """


@pytest.fixture
def multi_rack_input():
    """Three racks of different heights."""
    return """
    <racks>
      <rack name="A" height="10"><server>a</server></rack>
      <rack name="B" height="42"><switch>b</switch></rack>
      <rack name="C" height="20"><pdu>c</pdu></rack>
    </racks>
    """


@pytest.fixture
def datacenter_input():
    """A realistic rack with gaps, links, explicit positions and overrides."""
    return """
    <racks>
      <rack name="Edge" height="12">
        <patch>patch-01</patch>
        <cables height="1"/>
        <switch href="https://wiki.example/sw-01">sw-01</switch>
        <firewall>fw-01</firewall>
        <gap height="2"/>
        <server height="2" color="#000000">db-01</server>
        <san height="2">san-01</san>
        <ups at="1">ups-a</ups>
      </rack>
      <rack name="Spare">
        <blank height="2">reserved</blank>
      </rack>
    </racks>
    """


@pytest.fixture
def parser():
    """Default Parser instance."""
    return Parser()


@pytest.fixture
def engine():
    """Default RackLayoutEngine instance."""
    return RackLayoutEngine()


@pytest.fixture
def generator():
    """Default RackDiagramGenerator instance."""
    return RackDiagramGenerator()
