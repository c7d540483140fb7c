import pytest

from kieserver import config
from kieserver.config import DB, RBAC, Config, Sync

SAMPLE = """\
db:
  uri: mongodb://localhost:27017/kie
  kind: mongo
  poolSize: 10
  timeout: 5s
  sslEnabled: true
  rootCAFile: ca.pem
  verifyPeer: false
rbac:
  enabled: true
  rsaPublicKeyFile: rbac.pub
sync:
  enabled: true
"""


def write(tmp_path, text):
    path = tmp_path / "kie-conf.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_load_reads_sections(tmp_path):
    cfg = Config(config_file=write(tmp_path, SAMPLE))
    cfg.load()
    assert cfg.db.uri == "mongodb://localhost:27017/kie"
    assert cfg.db.kind == "mongo"
    assert cfg.db.pool_size == 10
    assert cfg.db.timeout == "5s"
    assert cfg.db.tls.ssl_enabled is True
    assert cfg.db.tls.root_ca == "ca.pem"
    assert cfg.rbac == RBAC(enabled=True, pub_key_file="rbac.pub")
    assert cfg.sync == Sync(enabled=True)


def test_load_keeps_unset_fields(tmp_path):
    path = write(tmp_path, "sync:\n  enabled: true\n")
    cfg = Config(config_file=path, node_name="kie0", db=DB(kind="etcd"))
    cfg.load()
    assert cfg.db.kind == "etcd"
    assert cfg.node_name == "kie0"
    assert cfg.config_file == path
    assert cfg.sync.enabled is True


def test_empty_file_changes_nothing(tmp_path):
    cfg = Config(config_file=write(tmp_path, ""))
    cfg.load()
    assert cfg == Config(config_file=cfg.config_file)


def test_scalar_read_into_string(tmp_path):
    cfg = Config(config_file=write(tmp_path, "db:\n  timeout: 30\n"))
    cfg.load()
    assert cfg.db.timeout == "30"


def test_wrong_bool_type(tmp_path):
    cfg = Config(config_file=write(tmp_path, "sync:\n  enabled: [1]\n"))
    with pytest.raises(ValueError):
        cfg.load()


def test_section_must_be_mapping(tmp_path):
    cfg = Config(config_file=write(tmp_path, "db: text\n"))
    with pytest.raises(ValueError):
        cfg.load()


def test_missing_file(tmp_path):
    cfg = Config(config_file=str(tmp_path / "absent.yaml"))
    with pytest.raises(FileNotFoundError):
        cfg.load()


def test_getters_follow_global():
    assert config.get_db() is config.CONFIGURATIONS.db
    assert config.get_rbac() is config.CONFIGURATIONS.rbac
    assert config.get_sync() is config.CONFIGURATIONS.sync