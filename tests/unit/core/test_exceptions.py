"""
Tests pour la hierarchie d'erreurs des fournisseurs.
"""

from mediameta.core.exceptions import (
    DecodeError,
    ProviderError,
    RetryExhaustedError,
    TransportError,
)


class TestProviderErrors:
    def test_message_carries_context(self):
        error = ProviderError("Echec", source="Openlibrary", reference="works/OL1W.json")

        assert str(error) == "Echec (source=Openlibrary, reference=works/OL1W.json)"

    def test_message_without_context(self):
        assert str(ProviderError("Echec")) == "Echec"

    def test_transport_error_status(self):
        error = TransportError("Statut HTTP 404", source="Openlibrary", status_code=404)

        assert error.status_code == 404
        assert isinstance(error, ProviderError)

    def test_retry_exhausted_is_transport_error(self):
        error = RetryExhaustedError(3, source="Openlibrary", status_code=429)

        assert isinstance(error, TransportError)
        assert error.attempts == 3
        assert error.status_code == 429
        assert "3 tentative" in str(error)

    def test_decode_error_is_provider_error(self):
        assert issubclass(DecodeError, ProviderError)
