from lib.google_api.test_helpers import fakeApi, resetGoogleApiState  # noqa: F401
