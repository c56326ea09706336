"""Test configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables BEFORE importing the package
os.environ["ENVIRONMENT"] = "test"

from linear_mcp.auth.pat import PATAuthProvider
from linear_mcp.graphql.client import GraphQLClient


@pytest.fixture
def pat_auth():
    return PATAuthProvider("lin_api_test_key")


@pytest.fixture
def mock_client():
    """A GraphQLClient whose execute() is an AsyncMock."""
    client = MagicMock(spec=GraphQLClient)
    client.execute = AsyncMock()
    return client
