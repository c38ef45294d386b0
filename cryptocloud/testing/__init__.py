"""Test doubles for code that depends on the CryptoCloud client."""

from cryptocloud.testing.factories import TestDataFactory
from cryptocloud.testing.mock_gateway import MockCryptocloudGateway, ScriptedFailure

__all__ = ["MockCryptocloudGateway", "ScriptedFailure", "TestDataFactory"]
