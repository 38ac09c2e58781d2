"""Shared test fixtures."""

from __future__ import annotations

import pytest

from dotsimplifier.models import SimplifyOptions


SQUARE_SVG = '''<svg width="100" height="100">
  <rect x="10" y="10" width="80" height="80" />
</svg>'''

FRAMED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect x="0" y="0" width="100" height="100" fill="white"/>
  <path d="M 20 20 L 80 20 L 80 80"/>
</svg>'''

PERCENT_FRAME_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 50 50">
  <rect width="100%" height="100%" fill="#eee"/>
  <line x1="5" y1="5" x2="45" y2="45"/>
</svg>'''

BACKGROUND_ONLY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect x="0.5" y="0" width="99.5" height="100"/>
</svg>'''

MIXED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100">
  <g>
    <polyline points="0,0 50,0 50,50"/>
    <polygon points="100,0 150,0 150,50"/>
  </g>
  <line x1="0" y1="90" x2="200" y2="90"/>
  <path d="M 10 10 C 10 40 40 40 40 10"/>
</svg>'''

NO_SHAPES_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
  <text x="1" y="5">hello</text>
</svg>'''

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24">
  <circle cx="12" cy="12" r="10"/>
</svg>'''


@pytest.fixture
def square_svg() -> str:
    return SQUARE_SVG


@pytest.fixture
def framed_svg() -> str:
    return FRAMED_SVG


@pytest.fixture
def percent_frame_svg() -> str:
    return PERCENT_FRAME_SVG


@pytest.fixture
def background_only_svg() -> str:
    return BACKGROUND_ONLY_SVG


@pytest.fixture
def mixed_svg() -> str:
    return MIXED_SVG


@pytest.fixture
def no_shapes_svg() -> str:
    return NO_SHAPES_SVG


@pytest.fixture
def circle_svg() -> str:
    return CIRCLE_SVG


@pytest.fixture
def source_options() -> SimplifyOptions:
    """Keep source coordinates and collapse straight runs."""
    return SimplifyOptions(epsilon=1.0, min_distance=0.5, should_resize=False)
