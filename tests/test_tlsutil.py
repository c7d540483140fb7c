import ssl

import pytest

from kieserver.config import TLS
from kieserver.tlsutil import RootCAMissingError, client_ssl_context


def test_without_ca_file():
    with pytest.raises(RootCAMissingError) as info:
        client_ssl_context(TLS())
    assert str(info.value) == "rootCAFile is empty in config file"


def test_missing_pwd_file(tmp_path):
    tls = TLS(
        root_ca=str(tmp_path / "trust.cer"),
        cert_file=str(tmp_path / "server.cer"),
        key_file=str(tmp_path / "server_key.pem"),
        cert_pwd_file=str(tmp_path / "xxx"),
    )
    with pytest.raises(FileNotFoundError):
        client_ssl_context(tls)


def test_pwd_file_read_before_ca_check(tmp_path):
    pwd_file = tmp_path / "cert_pwd"
    pwd_file.write_text("password", encoding="utf-8")
    with pytest.raises(RootCAMissingError):
        client_ssl_context(TLS(cert_pwd_file=str(pwd_file)))


def test_invalid_ca_content(tmp_path):
    ca = tmp_path / "trust.cer"
    ca.write_text("not a certificate", encoding="utf-8")
    with pytest.raises(ssl.SSLError):
        client_ssl_context(TLS(root_ca=str(ca)))