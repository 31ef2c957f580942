"""
poscell: binary cellular automaton with positional neighborhood rules.

Each cell's 3x3 neighborhood is encoded as a PatternKey that separates live
orthogonal neighbors from live diagonal ones, and looked up in an ordered
first-match RuleTable whose implicit default is dead.
"""

from .core import (
    Grid, PatternKey, encode_cell, encode_grid, key_at,
    Rule, RuleTable, REFERENCE_RULES, reference_table, load_rules, save_rules,
    GridStepper,
)
from .config import AutomatonConfig
from .render import render_grid, separator
from .seeder import seed_grid
from .simulation import Simulation

__version__ = "0.1.0"

__all__ = [
    'Grid',
    'PatternKey',
    'encode_cell',
    'encode_grid',
    'key_at',
    'Rule',
    'RuleTable',
    'REFERENCE_RULES',
    'reference_table',
    'load_rules',
    'save_rules',
    'GridStepper',
    'AutomatonConfig',
    'render_grid',
    'separator',
    'seed_grid',
    'Simulation',
]
