"""
Core automaton: grid, positional neighborhood encoding, rule table and stepper.
"""

from .grid import Grid
from .encoder import PatternKey, encode_cell, encode_grid, key_at
from .rule_table import Rule, RuleTable, REFERENCE_RULES, reference_table, load_rules, save_rules
from .stepper import GridStepper

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
]
