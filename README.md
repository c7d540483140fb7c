# kieserver

The core of a key-value configuration service. Each configuration item is a
key with a value, and it carries a set of labels such as `app` or `service`.
Items are looked up by key pattern and by label.

## What is in the package

- **Data models** (`kieserver.model`): `KVDoc`, `PollingDetail`, `KVResponse`
  and the other request and response documents. `KVDoc` and `PollingDetail`
  convert to and from JSON dictionaries (`to_dict`, `from_dict`); `KVDoc`
  also has `to_json` and `from_json`.
- **Validation** (`kieserver.validator`): `validate(obj)` checks the field
  rules of a `KVDoc`, `UpdateKVRequest`, `GetKVRequest`, `ListKVRequest` or
  `UploadKVRequest` and raises `ValidationError` (with a `failures` list of
  `(field, rule)` pairs) when a rule is broken. `check_rule(rule, value)`
  tests a single named pattern rule.
- **Labels**: `kieserver.labels.is_equivalent_label` and `is_contain_label`
  compare label sets; `kieserver.stringutil.format_map` renders labels as a
  stable string.
- **Shared names** (`kieserver.common`): query parameter names, header names,
  statuses and messages.
- **Configuration** (`kieserver.config`, `kieserver.command`): the `Config`
  dataclass with `DB`, `TLS`, `RBAC` and `Sync` sections, `Config.load()` to
  read the YAML file named by `config_file`, and `parse_config(args)` to fill
  the global `CONFIGURATIONS` from command-line flags (`--config`, `--name`,
  `--peer-addr`, `--listen-peer-addr`, `--advertise-addr`; the last four also
  read `NODE_NAME`, `PEER_ADDR`, `LISTEN_PEER_ADDR` and `ADVERTISE_ADDR`).
- **TLS** (`kieserver.tlsutil`): `client_ssl_context(tls)` builds a client
  `ssl.SSLContext` from a `TLS` section; it raises `RootCAMissingError` when
  no root CA file is set. `kieserver.cipherutil.try_decrypt` decrypts a value
  with a given function and falls back to the input on failure.
- **Storage**:
  - `kieserver.datasource.base` defines the DAO interfaces (`KVDao`,
    `HistoryDao`, `TrackDao`, `RevisionDao`, `Broker`), the plugin registry
    (`register_plugin`, `init`, `get_broker`) and the error types
    (`KeyNotExistsError`, `KVAlreadyExistsError`, `TooManyError`, ...).
  - `kieserver.datasource.options` holds `FindOptions` and `WriteOptions`.
  - `kieserver.datasource.sync` builds the sync `Task` and `Tombstone`
    records written when `WriteOptions(sync_enable=True)` is used.
  - `kieserver.datasource.etcd` is an etcd-style, prefix-keyed backend over
    `MemoryStore` (`store`), with `EtcdKVDao`, `EtcdHistoryDao`,
    `EtcdRevisionDao`, `EtcdTrackDao` and the `EtcdBroker` that hands them
    out (`broker`). Importing `kieserver.datasource.etcd.broker` registers
    the `etcd` and `embedded_etcd` plugins.
- **Utilities**: a `Semaphore` (`kieserver.semaphore`) that bounds
  concurrency, a `LongPollingCache` (`kieserver.cache`) for query results,
  and `client_ip` (`kieserver.iputil`) to find the caller's address from
  HTTP headers and the peer address.

## Formatting and comparing labels

```python
from kieserver.stringutil import format_map
from kieserver.labels import is_equivalent_label, is_contain_label

format_map({"version": "1", "service": "a"})  # "service=a::version=1"
format_map({})                                # "none"

is_equivalent_label(None, {})                 # True
is_contain_label({"app": "mall", "service": "cart"}, {"app": "mall"})  # True
```

## Validating documents

```python
from kieserver.model import KVDoc
from kieserver.validator import validate, ValidationError

validate(KVDoc(key="timeout", value="2s", project="shop", domain="default"))

try:
    validate(KVDoc(key="bad#key", value="x", project="shop", domain="default"))
except ValidationError as err:
    print(err.failures)  # [("key", "key")]
```

## Storing key values

```python
import kieserver.datasource.etcd.broker  # registers the "etcd" plugin
from kieserver.datasource import base
from kieserver.datasource.options import FindOptions
from kieserver.model import KVDoc

broker = base.init("etcd")
kv_dao = broker.get_kv_dao()
kv_dao.create(KVDoc(id="kv-1", key="timeout", value="2s",
                    domain="default", project="shop",
                    labels={"app": "mall"}))

resp = kv_dao.list("shop", "default", FindOptions(key="beginWith(time)"))
resp.total           # 1
resp.data[0].value   # "2s"

broker.get_revision_dao().apply_revision("default")  # 1
```

## Storage keys

```python
from kieserver.datasource.etcd.keys import kv_key, history, counter

kv_key("default", "shop", "kv-1")          # "kvs/default/shop/kv-1"
history("default", "shop", "kv-1", 7)      # "kv-history/default/shop/kv-1/7"
counter("revision_counter", "default")     # "counter/default/revision_counter"
```

## What the package does not do

- It has no HTTP server, REST resources or request handlers, and no command
  to start a server; `parse_config` only fills in the configuration.
- Storage lives in process memory (`MemoryStore`); nothing connects to an
  etcd cluster or any other database, and data is lost when the process
  ends. There is no document-database backend.
- There is no cluster membership, event notification or quota management.

## Running the tests

Install the `test` extra and run `pytest`.