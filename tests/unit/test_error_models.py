"""
Unit tests for error response models.
"""
import pytest

from cryptoquant.analytics.errors import InsufficientDataError, MismatchedSeriesError
from cryptoquant.data_providers import NoDataError, ProviderError, RateLimitExceededError
from cryptoquant.error_models import ErrorCode, create_error_response, to_error_response


@pytest.mark.unit
class TestCreateErrorResponse:
    
    def test_status_from_error_code(self):
        response, status = create_error_response(ErrorCode.NO_DATA, "Nothing here")
        
        assert status == 404
        assert response.error is True
        assert response.error_code == ErrorCode.NO_DATA
        assert response.metadata == {}
        assert response.timestamp.endswith("Z")
    
    def test_explicit_status(self):
        _, status = create_error_response(ErrorCode.INVALID_INPUT, "Bad", status_code=418)
        assert status == 418


@pytest.mark.unit
class TestToErrorResponse:
    
    def test_insufficient_data(self):
        response, status = to_error_response(InsufficientDataError("RSI(14)", 15, 5))
        
        assert status == 422
        assert response.error_code == ErrorCode.INSUFFICIENT_DATA
        assert response.metadata == {"metric": "RSI(14)", "required": 15, "actual": 5}
        assert response.detail == "InsufficientDataError"
        assert "15" in response.message
    
    def test_mismatched_series(self):
        response, status = to_error_response(MismatchedSeriesError("covariance", 3, 2))
        
        assert status == 400
        assert response.error_code == ErrorCode.INVALID_INPUT
        assert response.metadata == {"metric": "covariance"}
    
    def test_no_data(self):
        response, status = to_error_response(NoDataError("XRP"))
        
        assert status == 404
        assert response.metadata == {"symbol": "XRP"}
    
    def test_rate_limit(self):
        response, status = to_error_response(RateLimitExceededError(30, 60, 12.5))
        
        assert status == 429
        assert response.metadata == {"retry_after": 12.5}
    
    def test_upstream_error(self):
        response, status = to_error_response(ProviderError("boom", status_code=503))
        
        assert status == 502
        assert response.error_code == ErrorCode.UPSTREAM_ERROR
        assert response.metadata == {"status_code": 503}
    
    def test_plain_value_error(self):
        response, status = to_error_response(ValueError("Invalid timeframe"))
        
        assert status == 400
        assert response.message == "Invalid timeframe"
    
    def test_unexpected_error_hides_message(self):
        response, status = to_error_response(RuntimeError("secret internals"))
        
        assert status == 500
        assert response.error_code == ErrorCode.INTERNAL_ERROR
        assert response.message == "Internal error"
        assert response.detail == "RuntimeError"
