"""Prefix-keyed in-memory storage backend modelled on etcd."""