"""
Config form contribution of the dynamic field.

Declares the editable settings of a dynamic field. Rendering is left to
the host (see dynamic_field.ui.components for the Dash renderer).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .strings import Localizer

HEADER = 'header'
TEXTAREA = 'textarea'
TEXT = 'text'
CHECKBOX = 'checkbox'


@dataclass(frozen=True)
class FormFieldSpec:
    """One element of the config form."""

    name: str
    element: str
    label: str
    help_text: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def form_path(self) -> str:
        """Path used for submitted values and error keys, e.g. ``configdata.query``."""
        if self.element == HEADER:
            return self.name
        return f"configdata.{self.name}"


def config_form_definition(localizer: Localizer) -> List[FormFieldSpec]:
    """Return the ordered config form elements."""
    return [
        FormFieldSpec(
            name='header_specific_settings',
            element=HEADER,
            label=localizer.message('specific_settings'),
            attributes={'expanded': True},
        ),
        FormFieldSpec(
            name='query',
            element=TEXTAREA,
            label=localizer.message('query'),
            help_text=localizer.message('query_help'),
            attributes={'rows': 7, 'cols': 52},
        ),
        FormFieldSpec(
            name='autocomplete',
            element=CHECKBOX,
            label=localizer.message('autocomplete'),
            help_text=localizer.message('autocomplete_help'),
            attributes={'values': (0, 1)},
        ),
        FormFieldSpec(
            name='default_value',
            element=TEXT,
            label=localizer.message('default_value'),
            help_text=localizer.message('default_value_help'),
            attributes={'size': 50},
        ),
        FormFieldSpec(
            name='multiselect',
            element=CHECKBOX,
            label=localizer.message('multiselect'),
            attributes={'values': (0, 1)},
        ),
    ]
