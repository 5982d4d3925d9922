"""Test fixtures for HeroForge."""

import logging

import pytest

from heroforge.layers import create_default_mask_processor_config

from builders import make_group, make_processor, make_surface


@pytest.fixture
def scenario_tree():
    """
    Background group with one surface, and a main group whose surface is
    followed by a mask processor.
    """
    return [
        make_group('background', [make_surface('s1')]),
        make_group('main', [
            make_surface('s2'),
            make_processor('pr', [create_default_mask_processor_config()]),
        ]),
    ]


@pytest.fixture
def flat_tree():
    """Three root surfaces and a group holding two more."""
    return [
        make_surface('layer-1'),
        make_surface('layer-2'),
        make_group('group-1', [make_surface('child-1'), make_surface('child-2')]),
        make_surface('layer-3'),
    ]


@pytest.fixture
def heroforge_logs(caplog):
    """Capture heroforge log records at debug level."""
    caplog.set_level(logging.DEBUG, logger='heroforge')
    return caplog
