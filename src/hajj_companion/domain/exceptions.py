class HajjCompanionError(Exception):
    """Base exception for the Hajj Companion system."""

    pass


class RetrievalError(HajjCompanionError):
    """Base exception for knowledge retrieval failures."""

    pass


class DatastoreError(RetrievalError):
    """The knowledge datastore could not be queried."""

    pass


class DuplicateKnowledgeIdError(RetrievalError):
    """Two knowledge items share the same id."""

    pass


class InvalidQueryError(HajjCompanionError):
    """A search query is missing or is not a string."""

    pass


class GatewayError(HajjCompanionError):
    """Base exception for model gateway failures."""

    pass


class RateLimitError(GatewayError):
    """Gateway returned 429 Rate Limit Exceeded."""

    pass


class QuotaExceededError(GatewayError):
    """Gateway returned 402 Payment Required."""

    pass


class GatewayConfigError(GatewayError):
    """Gateway credentials or endpoint are not configured."""

    pass
