"""Pytest configuration and shared fixtures for the furimark test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from furimark import Parser, ParserOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "security: Tests covering link sanitization and resource bounds")


@pytest.fixture
def html_parser() -> Parser:
    """Provide a parser with the default HTML export."""
    return Parser()


@pytest.fixture
def ast_parser() -> Parser:
    """Provide a parser with the plain-list AST export."""
    return Parser(ParserOptions(export="ast"))


@pytest.fixture
def document():
    """Provide a function that parses text to a Document with default options."""
    parser = Parser()
    return parser.parse_to_document
