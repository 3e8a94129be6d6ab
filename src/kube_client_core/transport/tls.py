"""TLS configuration assembly.

The profile is secure by default and cannot be downgraded: TLS 1.2 or newer,
full chain and hostname verification, and an explicit, non-empty set of trust
roots. Client certificate authentication adds the certificate and key here,
since that identity is proven during the handshake rather than by header.

Example:
    ```python
    from kube_client_core.transport.tls import assemble_tls

    tls = assemble_tls(config)
    context = tls.create_ssl_context()
    ```
"""

import logging
import os
import ssl
import tempfile
from dataclasses import dataclass, field

from kube_client_core.auth.methods import ClientCertificate
from kube_client_core.config.exceptions import TransportAssemblyError
from kube_client_core.config.models import ClientConfiguration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportConfiguration:
    """TLS settings derived from a client configuration.

    Attributes:
        trust_roots: PEM bundle of trusted CA certificates.
        certificate_chain: PEM client certificates, empty unless client
            certificate authentication is active.
        private_key: PEM private key for the chain, if any.
        minimum_version: Lowest accepted protocol version.
        verify_mode: Peer certificate verification mode.
        check_hostname: Whether the server hostname must match its certificate.
    """

    trust_roots: str
    certificate_chain: tuple[str, ...] = ()
    private_key: str | None = field(default=None, repr=False)
    minimum_version: ssl.TLSVersion = ssl.TLSVersion.TLSv1_2
    verify_mode: ssl.VerifyMode = ssl.CERT_REQUIRED
    check_hostname: bool = True

    def create_ssl_context(self) -> ssl.SSLContext:
        """Build an SSL context for the HTTP transport.

        Raises:
            TransportAssemblyError: If the trust roots or the client
                certificate material cannot be loaded.
        """
        try:
            context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH, cadata=self.trust_roots)
        except (ssl.SSLError, ValueError) as e:
            raise TransportAssemblyError(f"Unable to load trust roots: {e}") from e

        context.minimum_version = self.minimum_version
        context.check_hostname = self.check_hostname
        context.verify_mode = self.verify_mode

        if self.certificate_chain:
            self._load_client_certificate(context)

        return context

    def _load_client_certificate(self, context: ssl.SSLContext) -> None:
        # ssl only loads certificate chains from files
        with tempfile.TemporaryDirectory(prefix="kube-client-") as directory:
            cert_path = os.path.join(directory, "client.crt")
            key_path = os.path.join(directory, "client.key")
            with open(cert_path, "w") as cert_file:
                cert_file.write("\n".join(self.certificate_chain))
            with open(os.open(key_path, os.O_WRONLY | os.O_CREAT, 0o600), "w") as key_file:
                key_file.write(self.private_key or "")

            try:
                context.load_cert_chain(cert_path, key_path)
            except ssl.SSLError as e:
                raise TransportAssemblyError(f"Unable to load client certificate: {e}") from e


def assemble_tls(config: ClientConfiguration) -> TransportConfiguration:
    """Derive the TLS settings for a client configuration.

    Args:
        config: The client configuration.

    Returns:
        A transport configuration with the fixed secure profile, the
        configured trust roots and, for client certificate authentication,
        the certificate and private key.

    Raises:
        TransportAssemblyError: If the configuration has no trust roots.
    """
    if not config.trust_roots or not config.trust_roots.strip():
        raise TransportAssemblyError(f"No trust roots configured for {config.master_url}")

    authentication = config.authentication
    if isinstance(authentication, ClientCertificate):
        logger.debug("Presenting client certificate during TLS handshake")
        return TransportConfiguration(
            trust_roots=config.trust_roots,
            certificate_chain=(authentication.certificate,),
            private_key=authentication.private_key,
        )

    return TransportConfiguration(trust_roots=config.trust_roots)
