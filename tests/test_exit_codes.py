"""
Tests for exit code mapping.
"""
import pytest
import yaml

from stackrepo.exit_codes import (
    get_exit_code_for_exception,
    CommandError,
    ConfigError,
    DuplicateRepositoryError,
    IndexFormatError,
    RepositoryFileNotFoundError,
    RepositoryNotFoundError,
    StorageError,
    TransportError,
    CONFIG_ERROR,
    DATA_ERROR,
    GENERAL_ERROR,
    NETWORK_ERROR,
    PERMISSION_ERROR,
    USAGE_ERROR,
)


class TestExitCodes:
    """Mapping exceptions onto process exit codes."""

    @pytest.mark.parametrize("exc, expected", [
        (TransportError("down", "https://example/index.yaml", 503), NETWORK_ERROR),
        (IndexFormatError("https://example/index.yaml", "bad"), DATA_ERROR),
        (ConfigError("broken"), CONFIG_ERROR),
        (RepositoryFileNotFoundError("/tmp/repository.yaml"), CONFIG_ERROR),
        (StorageError("disk full", "/tmp/x"), GENERAL_ERROR),
        (DuplicateRepositoryError("exists"), USAGE_ERROR),
        (RepositoryNotFoundError("nope"), USAGE_ERROR),
    ])
    def test_command_errors_use_their_own_code(self, exc, expected):
        assert get_exit_code_for_exception(exc) == expected

    def test_command_error_default(self):
        assert get_exit_code_for_exception(CommandError("failed")) == GENERAL_ERROR

    def test_builtin_exceptions(self):
        assert get_exit_code_for_exception(ValueError("x")) == DATA_ERROR
        assert get_exit_code_for_exception(PermissionError("x")) == PERMISSION_ERROR
        assert get_exit_code_for_exception(TimeoutError("x")) == NETWORK_ERROR

    def test_unknown_exception_is_general_error(self):
        assert get_exit_code_for_exception(RuntimeError("x")) == GENERAL_ERROR

    def test_yaml_errors_are_wrapped_before_reaching_the_cli(self):
        # Loaders convert YAML errors to ConfigError/IndexFormatError; a raw one is unexpected.
        assert get_exit_code_for_exception(yaml.YAMLError("x")) == GENERAL_ERROR
