"""
Dash components for the dynamic field.

This package renders the config form contribution and the option list
produced for a field.
"""

from .components import build_config_form, build_field_control, build_options_dropdown

__all__ = [
    'build_config_form',
    'build_field_control',
    'build_options_dropdown',
]
