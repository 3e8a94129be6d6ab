"""Settings resolution from the process environment and secret files.

Configuration loaders read their inputs (kubeconfig location, in-cluster
service host and port, mounted service account files) through this module so
that every lookup follows the same error and logging rules.

Settings come from environment variables, including values loaded from a
.env file, or from files such as the mounted service account token.

Example:
    ```python
    from kube_client_core.config.environment import EnvironmentResolver

    resolver = EnvironmentResolver()
    host = resolver.resolve(env_var_name="KUBERNETES_SERVICE_HOST", required=True)
    token = resolver.resolve_from_file(
        file_path="/var/run/secrets/kubernetes.io/serviceaccount/token",
        required=True,
    )
    ```

Security Considerations:
    - Resolved values are never logged, only their source (env var name, file path)
    - File contents have surrounding whitespace stripped
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from kube_client_core.config.exceptions import ConfigFileError, ConfigNotFoundError

logger = logging.getLogger(__name__)


class EnvironmentResolver:
    """Resolve settings from the environment and files.

    Attributes:
        _dotenv_loaded: Whether the .env file has been loaded.
        _dotenv_lock: Thread lock guarding the one-time .env load.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to a .env file. If None, python-dotenv searches
                parent directories.
            load_dotenv: Whether to load a .env file at all. Tests and
                embedding applications usually pass False.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for configuration discovery")
            except Exception as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(self, *, env_var_name: str, required: bool = False) -> str | None:
        """Resolve a setting from the environment.

        Args:
            env_var_name: Environment variable to consult.
            required: Raise instead of returning None when unresolved.

        Returns:
            The variable's value, or None if unset and not required.

        Raises:
            ConfigNotFoundError: If required and not found.
        """
        result = os.environ.get(env_var_name)
        if result is not None:
            logger.debug(f"Resolved setting from environment variable '{env_var_name}'")
        elif required:
            raise ConfigNotFoundError(
                f"Required setting not found (checked env var: {env_var_name})",
                sources=[f"environment variable '{env_var_name}'"],
            )
        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path,
        required: bool = False,
    ) -> str | None:
        """Read a setting from a file.

        ``~`` and ``$VAR`` in the path are expanded. Contents are stripped of
        surrounding whitespace; secrets are never logged.

        Args:
            file_path: Path to the file.
            required: Raise instead of returning None when the file is missing.

        Returns:
            Stripped file contents, or None if missing and not required.

        Raises:
            ConfigFileError: If required and the file cannot be read, or on
                permission and other read errors.
        """
        path_obj = Path(os.path.expanduser(os.path.expandvars(str(file_path))))

        try:
            content = path_obj.read_text().strip()
            logger.debug(f"Resolved setting from file: {path_obj} (***)")
            return content

        except FileNotFoundError:
            error_msg = f"Configuration file not found: {path_obj}"
            if required:
                raise ConfigFileError(error_msg, path=str(path_obj)) from None
            logger.debug(error_msg)
            return None

        except PermissionError:
            raise ConfigFileError(
                f"Permission denied reading configuration file: {path_obj}", path=str(path_obj)
            ) from None

        except OSError as e:
            raise ConfigFileError(f"Error reading configuration file {path_obj}: {e}", path=str(path_obj)) from e
