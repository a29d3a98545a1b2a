"""
Dash components for the dynamic field.

build_config_form() renders the config form contribution with validation
messages next to the offending controls; build_options_dropdown() renders
the options of a configured field.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import dash_bootstrap_components as dbc
from dash import dcc, html

from ..form import CHECKBOX, HEADER, TEXT, TEXTAREA, FormFieldSpec
from ..models import FieldConfig, OptionSet, ValidationErrors
from ..values import default_selection, parse_selection
from .styles import CLASSES, STYLES


def component_id(form_id: str, spec: FormFieldSpec) -> str:
    """Dash id of the control rendered for ``spec``."""
    return f"{form_id}-{spec.name.replace('_', '-')}"


def build_field_control(spec: FormFieldSpec, form_id: str, value: Any = None, error: Optional[str] = None):
    """Render a single config form element."""
    if spec.element == HEADER:
        return html.H4(spec.label, id=component_id(form_id, spec), className=CLASSES['section_header'])

    control_id = component_id(form_id, spec)
    children: List[Any] = []

    if spec.element == CHECKBOX:
        children.append(dbc.Checkbox(
            id=control_id,
            label=spec.label,
            value=bool(value),
        ))
    else:
        children.append(dbc.Label(spec.label, html_for=control_id))
        if spec.element == TEXTAREA:
            children.append(dbc.Textarea(
                id=control_id,
                value=value or '',
                rows=spec.attributes.get('rows'),
                cols=spec.attributes.get('cols'),
                invalid=bool(error),
                style=STYLES['query_textarea'],
            ))
        elif spec.element == TEXT:
            children.append(dbc.Input(
                id=control_id,
                type='text',
                value=value or '',
                html_size=str(spec.attributes.get('size', '')) or None,
                invalid=bool(error),
            ))
        else:
            raise ValueError(f"Unknown form element: {spec.element}")

    if error:
        children.append(dbc.FormFeedback(error, type='invalid', id=f"{control_id}-error"))
    if spec.help_text:
        children.append(dbc.FormText(spec.help_text, className=CLASSES['text_muted']))

    return html.Div(children, style=STYLES['form_group'])


def build_config_form(
    fields: Sequence[FormFieldSpec],
    errors: Optional[ValidationErrors] = None,
    config: Optional[FieldConfig] = None,
    form_id: str = 'dynamic-field-config'
):
    """
    Render the config form.

    Args:
        fields: Output of config_form_definition()
        errors: Validation errors keyed by form path
        config: Current configuration used as control values
        form_id: Prefix for component ids

    Returns:
        dbc.Form component
    """
    errors = errors or {}
    values: Dict[str, Any] = {}
    if config is not None:
        values = dict(config.to_form_data()['configdata'])

    return dbc.Form(
        [
            build_field_control(spec, form_id, values.get(spec.name), errors.get(spec.form_path))
            for spec in fields
        ],
        id=form_id,
    )


def build_options_dropdown(
    options: OptionSet,
    config: FieldConfig,
    dropdown_id: str,
    value: Optional[Union[str, List[str]]] = None
):
    """
    Render the options of a field as a dropdown.

    The sentinel entry becomes the placeholder. Without a stored value the
    configured default is preselected.
    """
    selected = parse_selection(value) if value is not None else default_selection(config)

    if config.multiselect:
        dropdown_value: Any = selected
    else:
        dropdown_value = selected[0] if selected else None

    return dcc.Dropdown(
        id=dropdown_id,
        options=options.to_dropdown_options(include_sentinel=False),
        value=dropdown_value,
        multi=config.multiselect,
        searchable=config.autocomplete,
        placeholder=options.sentinel.label,
        clearable=True,
    )
