"""
Auth package for the Aka API.

Provides shared-secret authorization for mutating requests: the caller
presents the secret in the `X-Authorization` header and it is compared
in constant time against the configured key.
"""
