import unittest

from odrivefs.errors.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    FileNotFound,
    HttpErrorInfo,
    InvalidArgumentError,
    OneDriveFsError,
    PermissionError,
    RateLimitError,
    RemoteNotFound,
    RemoteRequestFailed,
    is_status,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = OneDriveFsError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_remote_request_failed_carries_status_body_url(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=500, url="https://x/y", body="boom", reason="Server Error")
        )
        self.assertIsInstance(err, RemoteRequestFailed)
        self.assertEqual(err.status_code, 500)
        self.assertEqual(err.body, "boom")
        self.assertEqual(err.url, "https://x/y")
        self.assertEqual(err.details["status_code"], 500)
        self.assertIn("500 Server Error from https://x/y: boom", str(err))

    def test_map_http_error_basic(self) -> None:
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=404)), RemoteNotFound)
        self.assertIsInstance(
            map_http_error(HttpErrorInfo(status_code=400)), InvalidArgumentError
        )
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=401)), AuthError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=403)), PermissionError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=409)), ConflictError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=412)), ConflictError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=429)), RateLimitError)

    def test_map_http_error_other_is_api_error(self) -> None:
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=503)), ApiError)
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=418)), ApiError)

    def test_is_status(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404))
        self.assertTrue(is_status(err, 404))
        self.assertFalse(is_status(err, 500))
        self.assertFalse(is_status(ValueError("x"), 404))

    def test_file_not_found_keeps_uri(self) -> None:
        err = FileNotFound("onedrive://D1/a.txt")
        self.assertEqual(err.uri, "onedrive://D1/a.txt")
        self.assertIn("onedrive://D1/a.txt", str(err))


if __name__ == "__main__":
    unittest.main()
