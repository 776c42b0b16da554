"""Pytest configuration for MCP server tests."""

import os
import shutil
import tempfile

import pytest


# Path to test fixtures (saved parameter sets)
FIXTURES_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), 'fixtures'))

# Path to the project root (for reference files)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '../..'))


@pytest.fixture(scope="session")
def test_base_path():
    """Create a temporary project layout for testing.

    - input-parameters/testprogram/params.json (from fixtures)
    - reference/*.json (symlinked from project)
    """
    temp_dir = tempfile.mkdtemp()

    input_params_dir = os.path.join(temp_dir, 'input-parameters')
    os.makedirs(input_params_dir)
    shutil.copytree(
        os.path.join(FIXTURES_PATH, 'testprogram'),
        os.path.join(input_params_dir, 'testprogram')
    )

    os.symlink(
        os.path.join(PROJECT_ROOT, 'reference'),
        os.path.join(temp_dir, 'reference')
    )

    yield temp_dir

    shutil.rmtree(temp_dir, ignore_errors=True)
