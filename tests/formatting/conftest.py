"""Test configuration and fixtures for formatting tests."""

import pytest

from modelicafmt.formatting import DefaultFormattingRules, ModelicaFormatter


# Basic Modelica sources for formatting tests
SIMPLE_MODEL = "model A Real x; equation x = 1; end A;"

COMMENTED_MODEL = '''model A // first
Real x; /* second */ Real y;
end A;'''

COMPLEX_PACKAGE = '''within Modelica.Blocks;
package Sources "Signal sources"
  extends Modelica.Icons.SourcesPackage;
  import SI = Modelica.Units.SI;

  block Ramp "Generate ramp signal"
    parameter Real height = 1 "Height of ramps";
    parameter SI.Time duration(min = 0.0, start = 2) "Duration of ramp";
    parameter Real offset = 0 "Offset of output signal";
    parameter SI.Time startTime = 0 "Output = offset for time < startTime";
    Modelica.Blocks.Interfaces.RealOutput y annotation(Placement(transformation(extent = {{100, -10}, {120, 10}})));
  protected
    Real k[2, 2] = [1, 0; 0, 1];
  equation
    // piecewise linear
    y = offset + (if time < startTime then 0 else if time < (startTime + duration) then (time - startTime)*height/duration else height);
    when time > startTime then
      reinit(k[1, 1], 2);
    end when;
    for i in 1:2 loop
      k[i, i] = i^2;
    end for;
    annotation(Documentation(info = "<html><p>Ramp</p></html>"), Icon(coordinateSystem(extent = {{-100, -100}, {100, 100}})));
  end Ramp;

  function addOne
    input Real u;
    output Real v;
  algorithm
    v := u + 1;
    if v > 10 then
      v := 10;
    elseif v < 0 then
      v := 0;
    else
      v := v;
    end if;
    while v > 5 loop
      v := v - 1;
    end while;
  end addOne;

  type Voltage = Real(unit = "V");
  type Mode = enumeration(Off "off", On "on");

  model Circuit
    replaceable package Medium = Modelica.Media.Water constrainedby Modelica.Media.Interfaces.PartialMedium;
    Resistor r1(R = 10), r2(R = 20);
    Real z = sum({i for i in 1:3});
  equation
    connect(r1.n, r2.p);
  end Circuit;
end Sources; // end of file
'''

MALFORMED_MODEL = "model A Real x equation x = ; end A;"


@pytest.fixture
def simple_model():
    return SIMPLE_MODEL


@pytest.fixture
def commented_model():
    return COMMENTED_MODEL


@pytest.fixture
def complex_package():
    return COMPLEX_PACKAGE


@pytest.fixture
def malformed_model():
    return MALFORMED_MODEL


@pytest.fixture
def formatter():
    return ModelicaFormatter(DefaultFormattingRules.standard())


@pytest.fixture
def paren_formatter():
    return ModelicaFormatter(DefaultFormattingRules.expanded())
