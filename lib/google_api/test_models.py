"""
Tests for request and response models.
"""

from urllib.parse import parse_qs, urlparse

import pytest

from lib.google_api import BaseResponse, Extensions, Status
from lib.google_api.models import (
    PlacesDetailsRequest,
    PlacesDetailsResponse,
    PlacesPhotosRequest,
    PlacesPhotosResponse,
)


class TestPlacesDetailsRequest:
    def test_uri(self):
        request = PlacesDetailsRequest(
            key="test_key",
            placeId="ChIJN1t_tDeuEmsRUsoyG83frY4",
            language="ru",
            extensions=Extensions.REVIEW_SUMMARY,
        )

        uri = urlparse(request.getUri())
        params = parse_qs(uri.query)

        assert uri.scheme == "https"
        assert uri.netloc == "maps.googleapis.com"
        assert uri.path == "/maps/api/place/details/json"
        assert params == {
            "key": ["test_key"],
            "placeid": ["ChIJN1t_tDeuEmsRUsoyG83frY4"],
            "extensions": ["review_summary"],
            "language": ["ru"],
        }
        assert request.isQueryString is True

    def test_optional_parameters_are_skipped(self):
        params = parse_qs(urlparse(PlacesDetailsRequest(placeId="abc", useSsl=False).getUri()).query)

        assert params == {"placeid": ["abc"]}
        assert PlacesDetailsRequest(placeId="abc", useSsl=False).getUri().startswith("http://")

    def test_place_id_is_required(self):
        with pytest.raises(ValueError):
            PlacesDetailsRequest(key="test_key", placeId="   ").getUri()

    def test_request_is_immutable(self):
        request = PlacesDetailsRequest(placeId="abc")

        with pytest.raises(AttributeError):
            request.placeId = "other"  # type: ignore[misc]


class TestPlacesPhotosRequest:
    def test_uri(self):
        params = parse_qs(urlparse(PlacesPhotosRequest(photoReference="ref", maxHeight=200).getUri()).query)

        assert params == {"photoreference": ["ref"], "maxheight": ["200"]}

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"maxWidth": 100},
            {"photoReference": "ref"},
            {"photoReference": "ref", "maxWidth": 0},
            {"photoReference": "ref", "maxHeight": 1601},
        ],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            PlacesPhotosRequest(**kwargs).getUri()


class TestResponses:
    def test_from_dict_is_permissive(self):
        response = PlacesDetailsResponse.fromDict(
            {"status": "zero_results", "unexpected": 1, "raw_json": "ignored", "html_attributions": ["a"]}
        )

        assert response.status == Status.ZERO_RESULTS
        assert response.html_attributions == ["a"]
        assert response.result is None
        assert response.raw_json is None
        assert response.api_kwargs == {"unexpected": 1, "raw_json": "ignored"}

    def test_from_dict_missing_status(self):
        assert BaseResponse.fromDict({}).status is None
        assert BaseResponse.fromDict(None).status is None

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError):
            PlacesDetailsResponse.fromDict([1, 2, 3])  # type: ignore[arg-type]

    def test_stream_flags(self):
        assert PlacesPhotosResponse.isStream is True
        assert PlacesDetailsResponse.isStream is False
        assert PlacesPhotosResponse().buffer is None


class TestStatus:
    def test_from_str(self):
        assert Status.fromStr("OK") == Status.OK
        assert Status.fromStr(None) is None
        assert Status.fromStr("BRAND_NEW_STATUS") == Status.UNKNOWN_ERROR

    def test_is_success(self):
        assert Status.OK.isSuccess()
        assert Status.ZERO_RESULTS.isSuccess()
        assert not Status.INVALID_REQUEST.isSuccess()
        assert not Status.HTTP_ERROR.isSuccess()
