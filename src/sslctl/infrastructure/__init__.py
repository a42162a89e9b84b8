"""Infrastructure layer — GoGetSSL HTTP client and contact store.

This layer depends on stdlib and third-party libs (requests).
Failures are returned as :class:`~sslctl.services.result.TaggedError`
values, the only service-layer import allowed here.
"""
