"""
Data structures for the dynamic field engine.

FieldConfig is the persisted configuration of one field instance; OptionEntry
and OptionSet are recomputed from the field's query on every request and are
never stored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from typing_extensions import TypedDict

from core.exceptions import ValidationError

QUERY_FIELD = 'configdata.query'
DEFAULT_VALUE_FIELD = 'configdata.default_value'

# Field path -> human readable message; empty means the configuration is valid
ValidationErrors = Dict[str, str]

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


class RawConfigData(TypedDict, total=False):
    """The ``configdata`` group of a submitted config form."""
    query: str
    autocomplete: Union[bool, int, str]
    multiselect: Union[bool, int, str]
    default_value: str


class RawFormData(TypedDict, total=False):
    """A submitted config form as received from the host."""
    configdata: RawConfigData


def _coerce_flag(value: Any) -> bool:
    """Turn checkbox values (0/1, '0'/'1', bools, None) into a bool."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


def _coerce_text(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


@dataclass(frozen=True)
class FieldConfig:
    """Configuration of one dynamic field instance."""

    query: str = ''
    autocomplete: bool = False
    multiselect: bool = False
    default_value: str = ''

    @classmethod
    def from_form_data(cls, raw_form_data: Mapping[str, Any]) -> 'FieldConfig':
        """
        Build a FieldConfig from submitted form data.

        Accepts either ``{'configdata': {...}}`` or the flat ``configdata``
        mapping itself.

        Raises:
            ValidationError: If the form data is not a mapping
        """
        if not isinstance(raw_form_data, Mapping):
            raise ValidationError("Form data must be a mapping", field='configdata', value=type(raw_form_data).__name__)

        data = raw_form_data.get('configdata', raw_form_data)
        if not isinstance(data, Mapping):
            raise ValidationError("configdata must be a mapping", field='configdata', value=type(data).__name__)

        return cls(
            query=_coerce_text(data.get('query')),
            autocomplete=_coerce_flag(data.get('autocomplete')),
            multiselect=_coerce_flag(data.get('multiselect')),
            default_value=_coerce_text(data.get('default_value')),
        )

    def to_form_data(self) -> RawFormData:
        """Return the configuration in the layout the config form submits."""
        return RawFormData(configdata=RawConfigData(
            query=self.query,
            autocomplete=int(self.autocomplete),
            multiselect=int(self.multiselect),
            default_value=self.default_value,
        ))


@dataclass(frozen=True)
class OptionEntry:
    """A single selectable option."""
    key: str
    label: str


@dataclass(frozen=True)
class OptionSet:
    """
    Ordered options, always led by the empty-key "choose" sentinel.

    Keys coming from the data source are kept as delivered; duplicates are
    not removed.
    """

    sentinel: OptionEntry
    options: Tuple[OptionEntry, ...] = ()

    @classmethod
    def build(cls, choose_label: str, entries: Optional[List[OptionEntry]] = None) -> 'OptionSet':
        return cls(sentinel=OptionEntry(key='', label=choose_label), options=tuple(entries or ()))

    @property
    def entries(self) -> List[OptionEntry]:
        """All entries including the sentinel."""
        return [self.sentinel, *self.options]

    def keys(self) -> List[str]:
        """Option keys, sentinel excluded."""
        return [entry.key for entry in self.options]

    def labels(self) -> List[str]:
        """Option labels, sentinel excluded."""
        return [entry.label for entry in self.options]

    def label_for(self, key: str) -> Optional[str]:
        """Label of the first option with ``key``, or None."""
        for entry in self.options:
            if entry.key == key:
                return entry.label
        return None

    def is_empty(self) -> bool:
        """True when only the sentinel is present."""
        return not self.options

    def to_dict(self) -> Dict[str, str]:
        """Ordered key -> label mapping including the sentinel."""
        result = {self.sentinel.key: self.sentinel.label}
        for entry in self.options:
            result.setdefault(entry.key, entry.label)
        return result

    def to_dropdown_options(self, include_sentinel: bool = True) -> List[Dict[str, str]]:
        """Options in the ``{'label': ..., 'value': ...}`` layout of dcc.Dropdown."""
        entries = self.entries if include_sentinel else list(self.options)
        return [{'label': entry.label, 'value': entry.key} for entry in entries]

    def __len__(self) -> int:
        return len(self.options) + 1

    def __iter__(self) -> Iterator[OptionEntry]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self.options)


class OptionsError(Enum):
    """Ways in which turning a query into options can fail."""
    QUERY_EXECUTION_FAILED = "query_execution_failed"
    EMPTY_RESULT_SET = "empty_result_set"
    MISSING_IDENTITY_COLUMN = "missing_identity_column"
    MISSING_DATA_COLUMN = "missing_data_column"


@dataclass(frozen=True)
class MaterializeResult:
    """Outcome of running a field query: the options plus an optional error."""

    options: OptionSet
    error: Optional[OptionsError] = None
    detail: Optional[str] = None
    row_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None
