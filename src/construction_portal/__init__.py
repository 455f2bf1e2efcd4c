"""Construction Portal package.

Feature modules (credentials, profiles, ...) sit behind a thin Flask
controller layer, with service and repository layers underneath. MongoDB is
the backing store.
"""
