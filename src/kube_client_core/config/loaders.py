"""Configuration discovery.

Two loaders are tried in a fixed order when no explicit configuration is
given: the local kubeconfig file, then the in-cluster service account.

Example:
    ```python
    from kube_client_core.config.loaders import discover_config

    config = discover_config()
    print(config.master_url)
    ```
"""

import base64
import binascii
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

import yaml

from kube_client_core.auth.methods import AuthenticationMethod, BasicAuth, BearerToken, ClientCertificate
from kube_client_core.config.environment import EnvironmentResolver
from kube_client_core.config.exceptions import ConfigFileError, ConfigNotFoundError, ConfigurationError
from kube_client_core.config.models import DEFAULT_NAMESPACE, ClientConfiguration

logger = logging.getLogger(__name__)

KUBECONFIG_ENV_VAR = "KUBECONFIG"
DEFAULT_KUBECONFIG_PATH = "~/.kube/config"

SERVICE_HOST_ENV_VAR = "KUBERNETES_SERVICE_HOST"
SERVICE_PORT_ENV_VAR = "KUBERNETES_SERVICE_PORT"
SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")


class ConfigLoader(Protocol):
    """Something that can produce a complete client configuration or fail."""

    def load(self) -> ClientConfiguration: ...


class LocalFileConfigLoader:
    """Load configuration from a kubeconfig file.

    The file is taken from ``path``, else the first entry of ``$KUBECONFIG``,
    else ``~/.kube/config``. Only static credentials are supported: tokens,
    basic auth and client certificates.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        context: str | None = None,
        resolver: EnvironmentResolver | None = None,
    ):
        self._path = path
        self._context = context
        self._resolver = resolver or EnvironmentResolver()

    def __repr__(self) -> str:
        return f"LocalFileConfigLoader(path={self._path!r}, context={self._context!r})"

    def kubeconfig_path(self) -> Path:
        if self._path is not None:
            raw = str(self._path)
        else:
            env_value = self._resolver.resolve(env_var_name=KUBECONFIG_ENV_VAR)
            entries = [entry for entry in (env_value or "").split(os.pathsep) if entry]
            raw = entries[0] if entries else DEFAULT_KUBECONFIG_PATH
        return Path(os.path.expanduser(os.path.expandvars(raw)))

    def load(self) -> ClientConfiguration:
        path = self.kubeconfig_path()
        text = self._resolver.resolve_from_file(file_path=path, required=True)

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Malformed kubeconfig {path}: {e}", path=str(path)) from e
        if not isinstance(document, dict):
            raise ConfigFileError(f"Kubeconfig {path} is not a mapping", path=str(path))

        context_name = self._context or document.get("current-context")
        if not context_name:
            raise ConfigFileError(f"Kubeconfig {path} has no current-context", path=str(path))

        context = _named_entry(document, "contexts", "context", context_name, path)
        cluster = _named_entry(document, "clusters", "cluster", context.get("cluster"), path)
        user = _named_entry(document, "users", "user", context.get("user"), path)

        server = cluster.get("server")
        if not server or not isinstance(server, str):
            raise ConfigFileError(f"Cluster {context.get('cluster')!r} in {path} has no server", path=str(path))

        namespace = context.get("namespace") or DEFAULT_NAMESPACE
        if not isinstance(namespace, str):
            raise ConfigFileError(f"Context {context_name!r} in {path} has an invalid namespace", path=str(path))

        trust_roots = self._read_material(
            cluster, "certificate-authority-data", "certificate-authority", path, required=False
        )

        logger.debug(f"Using kubeconfig {path} with context {context_name!r}")
        return ClientConfiguration(
            master_url=server,
            authentication=self._authentication(user, path),
            trust_roots=trust_roots or "",
            namespace=namespace,
        )

    def _authentication(self, user: dict[str, Any], path: Path) -> AuthenticationMethod:
        if "exec" in user or "auth-provider" in user:
            raise ConfigFileError(f"Unsupported credential plugin in kubeconfig {path}", path=str(path))

        if user.get("token"):
            return BearerToken(user["token"])
        if user.get("tokenFile"):
            if not isinstance(user["tokenFile"], str):
                raise ConfigFileError(f"Invalid tokenFile in kubeconfig {path}", path=str(path))
            token_path = _relative_to(path, user["tokenFile"])
            return BearerToken(self._resolver.resolve_from_file(file_path=token_path, required=True))
        if user.get("username") and user.get("password") is not None:
            return BasicAuth(username=user["username"], password=user["password"])

        certificate = self._read_material(user, "client-certificate-data", "client-certificate", path)
        private_key = self._read_material(user, "client-key-data", "client-key", path)
        if certificate and private_key:
            return ClientCertificate(certificate=certificate, private_key=private_key)

        raise ConfigFileError(f"No usable user credentials in kubeconfig {path}", path=str(path))

    def _read_material(
        self, entry: dict[str, Any], data_key: str, file_key: str, path: Path, required: bool = False
    ) -> str | None:
        """Read PEM material given inline as base64 or as a file path."""
        if entry.get(data_key):
            try:
                return base64.b64decode(entry[data_key], validate=True).decode("utf-8")
            except (binascii.Error, TypeError, ValueError) as e:
                raise ConfigFileError(f"Invalid {data_key} in kubeconfig {path}: {e}", path=str(path)) from e
        if entry.get(file_key):
            if not isinstance(entry[file_key], str):
                raise ConfigFileError(f"Invalid {file_key} in kubeconfig {path}", path=str(path))
            return self._resolver.resolve_from_file(file_path=_relative_to(path, entry[file_key]), required=True)
        if required:
            raise ConfigFileError(f"Missing {data_key} or {file_key} in kubeconfig {path}", path=str(path))
        return None


class ServiceAccountConfigLoader:
    """Load configuration from the service account mounted into a pod."""

    def __init__(
        self,
        account_dir: str | Path = SERVICE_ACCOUNT_DIR,
        resolver: EnvironmentResolver | None = None,
    ):
        self._account_dir = Path(account_dir)
        self._resolver = resolver or EnvironmentResolver()

    def __repr__(self) -> str:
        return f"ServiceAccountConfigLoader(account_dir={self._account_dir})"

    def load(self) -> ClientConfiguration:
        host = self._resolver.resolve(env_var_name=SERVICE_HOST_ENV_VAR, required=True)
        port = self._resolver.resolve(env_var_name=SERVICE_PORT_ENV_VAR, required=True)
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"

        token = self._resolver.resolve_from_file(file_path=self._account_dir / "token", required=True)
        trust_roots = self._resolver.resolve_from_file(file_path=self._account_dir / "ca.crt", required=True)
        namespace = self._resolver.resolve_from_file(file_path=self._account_dir / "namespace")

        logger.debug(f"Using in-cluster service account from {self._account_dir}")
        return ClientConfiguration(
            master_url=f"https://{host}:{port}",
            authentication=BearerToken(token),
            trust_roots=trust_roots,
            namespace=namespace or DEFAULT_NAMESPACE,
        )


def default_loaders() -> list[ConfigLoader]:
    resolver = EnvironmentResolver()
    return [LocalFileConfigLoader(resolver=resolver), ServiceAccountConfigLoader(resolver=resolver)]


def discover_config(loaders: Sequence[ConfigLoader] | None = None) -> ClientConfiguration:
    """Return the configuration of the first loader that succeeds.

    Args:
        loaders: Loaders to try in order. Defaults to the local kubeconfig
            file followed by the in-cluster service account.

    Raises:
        ConfigNotFoundError: If every loader fails.
    """
    if loaders is None:
        loaders = default_loaders()

    attempted = []
    for loader in loaders:
        try:
            config = loader.load()
        except ConfigurationError as e:
            logger.debug(f"Configuration discovery via {loader!r} failed: {e}")
            attempted.append(f"{loader!r}: {e}")
            continue
        logger.debug(f"Discovered configuration via {loader!r}")
        return config

    raise ConfigNotFoundError("No usable Kubernetes configuration found", sources=attempted)


def _named_entry(document: dict[str, Any], section: str, key: str, name: str | None, path: Path) -> dict[str, Any]:
    entries = document.get(section) or []
    if not isinstance(entries, list):
        raise ConfigFileError(f"Section {section!r} in kubeconfig {path} is not a list", path=str(path))
    for entry in entries:
        if isinstance(entry, dict) and entry.get("name") == name:
            value = entry.get(key) or {}
            if not isinstance(value, dict):
                raise ConfigFileError(f"The {key} named {name!r} in kubeconfig {path} is not a mapping", path=str(path))
            return value
    raise ConfigFileError(f"No {key} named {name!r} in kubeconfig {path}", path=str(path))


def _relative_to(kubeconfig: Path, value: str) -> Path:
    candidate = Path(os.path.expanduser(value))
    if candidate.is_absolute():
        return candidate
    return kubeconfig.parent / candidate
