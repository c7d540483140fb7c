"""Client TLS context built from the TLS settings."""

from __future__ import annotations

import logging
import ssl

from kieserver.cipherutil import try_decrypt
from kieserver.config import TLS

logger = logging.getLogger(__name__)


class RootCAMissingError(ValueError):
    """Raised when no root CA file is configured."""

    def __init__(self) -> None:
        super().__init__("rootCAFile is empty in config file")


def client_ssl_context(tls: TLS) -> ssl.SSLContext:
    """Return a client SSL context; host names are not verified."""
    key_pass: str | None = None
    if tls.cert_pwd_file:
        try:
            with open(tls.cert_pwd_file, encoding="utf-8") as fh:
                key_pass = try_decrypt(fh.read())
        except OSError as exc:
            logger.error("read cert password file failed: %s", exc)
            raise
    if not tls.root_ca:
        error = RootCAMissingError()
        logger.error("%s", error)
        raise error
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.check_hostname = False
    context.verify_mode = ssl.CERT_REQUIRED if tls.verify_peer else ssl.CERT_NONE
    context.load_verify_locations(cafile=tls.root_ca)
    if tls.cert_file:
        context.load_cert_chain(
            tls.cert_file, keyfile=tls.key_file or None, password=key_pass or None
        )
    return context