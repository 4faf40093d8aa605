"""
Tests for the Configuration Manager.

Covers configuration loading, merging of config directories,
environment substitution and section accessors.
"""

import tempfile
from pathlib import Path

import pytest

from internal.config.manager import ConfigManager, substituteEnvVars

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def tempDir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sampleConfigToml():
    """Provide sample valid TOML configuration."""
    return """
[http]
proxy = "http://proxy.local:3128"

[google-api]
retry-count = 3
retry-delay = 0.5

[logging]
level = "INFO"
"""


@pytest.fixture
def overrideToml():
    """Provide override configuration TOML."""
    return """
[google-api]
retry-count = 10

[logging]
level = "DEBUG"
"""


# ============================================================================
# Helper Functions
# ============================================================================


def createConfigFile(directory: Path, filename: str, content: str) -> Path:
    """Create a TOML config file in the specified directory."""
    filePath = directory / filename
    filePath.write_text(content)
    return filePath


def createConfigDir(baseDir: Path, dirName: str, files: dict) -> Path:
    """Create a config directory with multiple TOML files."""
    configDir = baseDir / dirName
    configDir.mkdir(parents=True, exist_ok=True)

    for filename, content in files.items():
        createConfigFile(configDir, filename, content)

    return configDir


# ============================================================================
# Tests
# ============================================================================


class TestConfigManagerLoading:
    """Test ConfigManager loading and merging."""

    def testInitWithValidConfig(self, tempDir, sampleConfigToml):
        """Test initialization with valid configuration file."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = ConfigManager(str(configPath), dotEnvFile=str(tempDir / ".env"))

        assert manager.configPath == str(configPath)
        assert manager.getHttpConfig()["proxy"] == "http://proxy.local:3128"
        assert manager.getGoogleApiConfig()["retry-count"] == 3
        assert manager.getLoggingConfig()["level"] == "INFO"

    def testConfigDirsOverrideMainConfig(self, tempDir, sampleConfigToml, overrideToml):
        """Test values from config directories override main config."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "conf.d", {"override.toml": overrideToml})

        manager = ConfigManager(str(configPath), configDirs=[str(configDir)], dotEnvFile=str(tempDir / ".env"))

        apiConfig = manager.getGoogleApiConfig()
        assert apiConfig["retry-count"] == 10
        # Not overridden values are kept
        assert apiConfig["retry-delay"] == 0.5
        assert manager.getLoggingConfig()["level"] == "DEBUG"

    def testInitWithoutConfigFileButWithDirs(self, tempDir, overrideToml):
        """Test initialization without main config file but with config dirs."""
        configDir = createConfigDir(tempDir, "conf.d", {"override.toml": overrideToml})

        manager = ConfigManager(
            str(tempDir / "nonexistent.toml"), configDirs=[str(configDir)], dotEnvFile=str(tempDir / ".env")
        )

        assert manager.getGoogleApiConfig()["retry-count"] == 10
        assert manager.getHttpConfig() == {}

    def testInitWithNonExistentConfigAndNoDirs(self, tempDir):
        """Test initialization exits when config file doesn't exist and no dirs provided."""
        with pytest.raises(SystemExit) as excInfo:
            ConfigManager(str(tempDir / "nonexistent.toml"), dotEnvFile=str(tempDir / ".env"))

        assert excInfo.value.code == 1

    def testInvalidTomlExits(self, tempDir):
        """Test malformed main config exits."""
        configPath = createConfigFile(tempDir, "config.toml", "[http\nproxy = 1")

        with pytest.raises(SystemExit):
            ConfigManager(str(configPath), dotEnvFile=str(tempDir / ".env"))

    def testInvalidTomlInDirIsSkipped(self, tempDir, sampleConfigToml):
        """Test malformed file in config dir is skipped."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "conf.d", {"broken.toml": "[logging\nlevel = 1"})

        manager = ConfigManager(str(configPath), configDirs=[str(configDir)], dotEnvFile=str(tempDir / ".env"))

        assert manager.getLoggingConfig()["level"] == "INFO"


class TestEnvSubstitution:
    """Test ${VAR} substitution."""

    def testSubstituteFromEnvironment(self, monkeypatch):
        """Test placeholders are replaced recursively."""
        monkeypatch.setenv("GAPI_TEST_PROXY", "http://env-proxy:8080")

        result = substituteEnvVars({"http": {"proxy": "${GAPI_TEST_PROXY}"}, "list": ["${GAPI_TEST_PROXY}", 1]})

        assert result["http"]["proxy"] == "http://env-proxy:8080"
        assert result["list"] == ["http://env-proxy:8080", 1]

    def testUnknownVariableKept(self, monkeypatch):
        """Test unknown placeholders are left as is."""
        monkeypatch.delenv("GAPI_TEST_MISSING", raising=False)

        assert substituteEnvVars("${GAPI_TEST_MISSING}") == "${GAPI_TEST_MISSING}"

    def testDotEnvFileIsUsed(self, tempDir, monkeypatch):
        """Test values from .env file are substituted into config."""
        # Register variable in monkeypatch so that value loaded from .env is removed afterwards
        monkeypatch.setenv("GAPI_TEST_DOTENV_PROXY", "")
        monkeypatch.delenv("GAPI_TEST_DOTENV_PROXY")
        dotEnv = createConfigFile(tempDir, ".env", 'GAPI_TEST_DOTENV_PROXY="http://dotenv:3128"\n')
        configPath = createConfigFile(tempDir, "config.toml", '[http]\nproxy = "${GAPI_TEST_DOTENV_PROXY}"\n')

        manager = ConfigManager(str(configPath), dotEnvFile=str(dotEnv))

        assert manager.getHttpConfig()["proxy"] == "http://dotenv:3128"
