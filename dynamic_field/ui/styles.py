"""
Styling constants for the dynamic field UI components.
"""

SPACING = {
    'xs': '5px',
    'sm': '10px',
    'md': '20px',
}

STYLES = {
    'form_group': {
        'marginBottom': SPACING['md']
    },

    'query_textarea': {
        'fontFamily': 'monospace'
    },
}

CLASSES = {
    'section_header': "card-title mb-3",
    'text_muted': "text-muted",
}
