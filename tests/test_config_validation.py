"""
Tests for the config validation pipeline.
Covers the short-circuit order, fault containment and the DuckDB end-to-end path.
"""
import copy
import os
import sys
from unittest.mock import MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.exceptions import DataSourceError, SecurityError
from dynamic_field.models import DEFAULT_VALUE_FIELD, QUERY_FIELD, FieldConfig
from dynamic_field.options import get_options
from dynamic_field.sources import DuckDBDataSource, StaticDataSource
from dynamic_field.validation import validate_config

QUERY = "SELECT id, name as data FROM users"


def form(query=QUERY, autocomplete=0, multiselect=0, default_value=''):
    """Build submitted form data."""
    return {
        'configdata': {
            'query': query,
            'autocomplete': autocomplete,
            'multiselect': multiselect,
            'default_value': default_value,
        }
    }


class TestQueryChecks:
    """Errors attached to the query field."""

    @pytest.mark.parametrize("query", ['', '   ', None])
    def test_query_required(self, users_source, formatter, localizer, query):
        errors = validate_config(form(query=query), users_source, formatter, localizer)

        assert errors == {QUERY_FIELD: localizer.message('required')}
        assert users_source.queries == []

    def test_missing_query_key(self, users_source, formatter, localizer):
        errors = validate_config({'configdata': {}}, users_source, formatter, localizer)
        assert errors == {QUERY_FIELD: localizer.message('required')}

    @pytest.mark.parametrize("query", [
        "DROP TABLE users",
        "SELECT id, name AS data FROM users; DELETE FROM users",
        "WITH x AS (SELECT 1) SELECT * FROM x",
    ])
    def test_unsafe_query_stops_validation(self, users_source, formatter, localizer, query):
        errors = validate_config(form(query=query, default_value='zzz'), users_source, formatter, localizer)

        assert errors == {QUERY_FIELD: localizer.message('query_unsafe')}
        assert users_source.queries == []

    def test_empty_result_set(self, formatter, localizer):
        errors = validate_config(form(default_value='1'), StaticDataSource([]), formatter, localizer)

        assert errors == {QUERY_FIELD: localizer.message('query_empty')}
        assert 'empty result set' in errors[QUERY_FIELD]

    def test_identity_column_missing(self, formatter, localizer):
        source = StaticDataSource([{'name': 'Alice', 'data': 'Alice'}])
        errors = validate_config(form(), source, formatter, localizer)

        assert 'identity column' in errors[QUERY_FIELD]
        assert '"id"' in errors[QUERY_FIELD]

    def test_data_column_missing(self, formatter, localizer):
        source = StaticDataSource([{'id': 1, 'name': 'Alice'}])
        errors = validate_config(form(), source, formatter, localizer)

        assert 'data column' in errors[QUERY_FIELD]
        assert '"data"' in errors[QUERY_FIELD]

    def test_execution_error_embeds_fault(self, formatter, localizer):
        source = StaticDataSource(error=DataSourceError("Binder Error: column name not found"))
        errors = validate_config(form(), source, formatter, localizer)

        assert errors[QUERY_FIELD].startswith('Query execution error')
        assert 'column name not found' in errors[QUERY_FIELD]
        assert DEFAULT_VALUE_FIELD not in errors


class TestFaultContainment:
    """Validation never raises."""

    def test_transport_fault_reported_on_query(self, formatter, localizer):
        source = MagicMock()
        source.execute_readonly_query.side_effect = TimeoutError("read timed out")

        errors = validate_config(form(default_value='1'), source, formatter, localizer)

        assert list(errors) == [QUERY_FIELD]
        assert errors[QUERY_FIELD] == 'SQL error: read timed out'
        source.execute_readonly_query.assert_called_once_with(QUERY)

    def test_engine_error_reported_on_query(self, formatter, localizer):
        source = StaticDataSource(error=SecurityError("Refusing to execute query"))
        errors = validate_config(form(), source, formatter, localizer)

        assert errors == {QUERY_FIELD: 'SQL error: Refusing to execute query'}

    def test_formatter_fault_reported(self, users_source, localizer):
        formatter = MagicMock()
        formatter.format.side_effect = RuntimeError("bad markup")

        errors = validate_config(form(), users_source, formatter, localizer)

        assert errors == {QUERY_FIELD: 'SQL error: bad markup'}

    @pytest.mark.parametrize("raw", [None, "configdata", {'configdata': 'SELECT 1'}])
    def test_malformed_form_data(self, users_source, formatter, localizer, raw):
        errors = validate_config(raw, users_source, formatter, localizer)

        assert list(errors) == [QUERY_FIELD]
        assert errors[QUERY_FIELD].startswith('SQL error:')

    def test_fault_logged(self, formatter, localizer, caplog):
        source = StaticDataSource(error=OSError("network unreachable"))
        with caplog.at_level('ERROR'):
            validate_config(form(), source, formatter, localizer)

        assert any('validating field configuration' in record.message for record in caplog.records)


class TestDefaultValueStage:
    """Default value errors and the stage order."""

    def test_single_select_multiple_defaults(self, users_source, formatter, localizer):
        errors = validate_config(form(default_value='1,2'), users_source, formatter, localizer)

        assert list(errors) == [DEFAULT_VALUE_FIELD]
        assert '2' in errors[DEFAULT_VALUE_FIELD]

    def test_single_select_unknown_default(self, users_source, formatter, localizer):
        errors = validate_config(form(default_value='9'), users_source, formatter, localizer)
        assert errors == {DEFAULT_VALUE_FIELD: localizer.message('default_missing', value='9')}

    def test_single_select_known_default(self, users_source, formatter, localizer):
        assert validate_config(form(default_value='2'), users_source, formatter, localizer) == {}

    def test_multiselect_defaults_not_checked(self, users_source, formatter, localizer):
        errors = validate_config(form(multiselect='1', default_value='1,9'), users_source, formatter, localizer)
        assert errors == {}

    def test_flat_form_data_accepted(self, users_source, formatter, localizer):
        raw = form(default_value='9')['configdata']
        errors = validate_config(raw, users_source, formatter, localizer)
        assert list(errors) == [DEFAULT_VALUE_FIELD]


class TestIdempotence:
    """No hidden state between passes."""

    def test_same_input_same_errors(self, users_source, formatter, localizer):
        raw = form(default_value='1,2')
        snapshot = copy.deepcopy(raw)

        first = validate_config(raw, users_source, formatter, localizer)
        second = validate_config(raw, users_source, formatter, localizer)

        assert first == second
        assert first is not second
        assert raw == snapshot

    def test_success_is_repeatable(self, users_source, formatter, localizer):
        assert validate_config(form(), users_source, formatter, localizer) == {}
        assert validate_config(form(), users_source, formatter, localizer) == {}


class TestEndToEnd:
    """Validation and rendering against a real DuckDB database."""

    def test_two_row_users_query(self, db_manager, formatter, localizer):
        source = DuckDBDataSource(db_manager)
        raw = form(query=QUERY, autocomplete=0, multiselect=0, default_value='')

        errors = validate_config(raw, source, formatter, localizer)
        options = get_options(FieldConfig.from_form_data(raw), source, formatter, localizer)

        assert errors == {}
        assert len(options) == 3
        assert options.keys() == ['1', '2']
        assert options.labels() == ['Alice', 'Bob']

    def test_unknown_table_reported(self, db_manager, formatter, localizer):
        source = DuckDBDataSource(db_manager)
        errors = validate_config(form(query="SELECT id, name AS data FROM missing_table"), source, formatter, localizer)

        assert errors[QUERY_FIELD].startswith('Query execution error')
        assert 'missing_table' in errors[QUERY_FIELD]

    def test_updated_at_column_passes(self, db_manager, formatter, localizer):
        source = DuckDBDataSource(db_manager)
        raw = form(query="SELECT id, updated_at AS data FROM users", default_value='1')

        assert validate_config(raw, source, formatter, localizer) == {}

    def test_missing_data_column_from_database(self, db_manager, formatter, localizer):
        source = DuckDBDataSource(db_manager)
        errors = validate_config(form(query="SELECT id, name FROM users"), source, formatter, localizer)

        assert errors == {QUERY_FIELD: localizer.message('query_data_missing', column='data')}

    def test_empty_table_from_database(self, db_manager, formatter, localizer):
        source = DuckDBDataSource(db_manager)
        errors = validate_config(form(query="SELECT id, name AS data FROM users WHERE id > 100"),
                                 source, formatter, localizer)

        assert errors == {QUERY_FIELD: localizer.message('query_empty')}
