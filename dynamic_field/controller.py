"""
Host-facing controller for the dynamic field type.

DynamicFieldController binds a data source, a formatter and a localizer to
the field operations so the host can call them with a configuration only.
"""

from typing import Any, Iterable, List, Mapping, Optional, Union

from core.config import Settings
from core.database import get_database_manager
from core.exceptions import ConfigurationError
from core.logging_config import get_logger

from .form import FormFieldSpec, config_form_definition
from .formatting import MultilangFormatter, TextFormatter
from .models import FieldConfig, OptionSet, ValidationErrors
from .options import get_options
from .sources import DataSource, DuckDBDataSource
from .strings import Localizer, StringTable
from .validation import validate_config
from .values import export_value

logger = get_logger(__name__)


class DynamicFieldController:
    """
    Entry point for hosts embedding the dynamic field.

    Args:
        data_source: Executes option queries
        formatter: Display formatting for keys and labels (multilang by default)
        localizer: Message templates (built-in English strings by default)
        settings: Provides the identity/data column names and language
    """

    TYPE = 'dynamic'

    def __init__(
        self,
        data_source: DataSource,
        formatter: Optional[TextFormatter] = None,
        localizer: Optional[Localizer] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or Settings()
        self.data_source = data_source
        self.formatter = formatter or MultilangFormatter(self.settings.display.language)
        self.localizer = localizer or StringTable(self.settings.strings)

    @property
    def identity_column(self) -> str:
        return self.settings.query.identity_column

    @property
    def data_column(self) -> str:
        return self.settings.query.data_column

    def config_form_definition(self) -> List[FormFieldSpec]:
        """Editable settings of the field, in display order."""
        return config_form_definition(self.localizer)

    def get_options(self, config: FieldConfig) -> OptionSet:
        """Options to render for ``config``; recomputed on every call."""
        return get_options(
            config,
            self.data_source,
            self.formatter,
            self.localizer,
            identity_column=self.identity_column,
            data_column=self.data_column,
        )

    def validate_config(self, raw_form_data: Mapping[str, Any]) -> ValidationErrors:
        """Validate a submitted config form; an empty result means it may be saved."""
        errors = validate_config(
            raw_form_data,
            self.data_source,
            self.formatter,
            self.localizer,
            identity_column=self.identity_column,
            data_column=self.data_column,
        )
        if errors:
            logger.info(f"Field configuration rejected: {sorted(errors)}")
        return errors

    def export_value(self, config: FieldConfig, value: Optional[Union[str, Iterable[str]]]) -> str:
        """Display text for a stored value."""
        return export_value(value, self.get_options(config))


def create_controller(settings: Optional[Settings] = None) -> DynamicFieldController:
    """
    Build a controller over the shared DuckDB database manager.

    Args:
        settings: Settings to use; loaded through config_manager when omitted

    Raises:
        ConfigurationError: If the settings do not validate
    """
    if settings is None:
        from config_manager import get_settings
        settings = get_settings()

    errors = settings.validate()
    if errors:
        raise ConfigurationError(
            f"Invalid dynamic field settings: {'; '.join(errors)}",
            config_file=settings.config_file_path
        )

    db_manager = get_database_manager(settings.database.path, read_only=settings.database.read_only)
    return DynamicFieldController(DuckDBDataSource(db_manager), settings=settings)
