"""Persistence layer: DAO interfaces, options, sync records and an in-memory backend."""