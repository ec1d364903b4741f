#!/usr/bin/env python3
"""
Validation script for URL Shortener service.
Runs the shorten/redirect scenarios against a live instance.
"""

import re
import sys
import time
import argparse
import requests
from typing import Optional
from datetime import datetime

KEY_RE = re.compile(r"[0-9a-f]{8}")


class ServiceValidator:
    """Validates URL shortener service functionality."""

    def __init__(self, base_url: str = "http://localhost:8080", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.test_results = []

    def print_header(self, text: str):
        """Print a formatted header."""
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        """Print test result."""
        status = "PASS" if passed else "FAIL"
        self.test_results.append((name, passed))
        print(f"[{status}] {name}")
        if details:
            print(f"       {details}")

    def _shorten(self, url: str) -> requests.Response:
        return self.session.post(
            f"{self.base_url}/shorten",
            json={"url": url},
            timeout=self.timeout,
        )

    def test_landing_page(self) -> bool:
        """GET / serves the HTML landing page."""
        try:
            response = self.session.get(f"{self.base_url}/", timeout=self.timeout)
            content_type = response.headers.get("content-type", "N/A")
            is_ok = response.status_code == 200 and "text/html" in content_type
            self.print_test("Landing Page", is_ok, f"Content-Type: {content_type}")
            return is_ok
        except requests.RequestException as e:
            self.print_test("Landing Page", False, f"Error: {e}")
            return False

    def test_shorten_schemeless(self, url: str) -> Optional[str]:
        """POST /shorten with a URL lacking a scheme returns a hex key."""
        try:
            response = self._shorten(url)
            if response.status_code != 200:
                self.print_test("Shorten URL", False, f"Status: {response.status_code}")
                return None

            data = response.json()
            key = data.get("key", "")
            short_url = data.get("short_url", "")
            passed = bool(KEY_RE.fullmatch(key)) and short_url.endswith(f"/go/{key}")
            self.print_test("Shorten URL", passed, f"Key: {key}, Short URL: {short_url}")
            return key if passed else None
        except (requests.RequestException, ValueError) as e:
            self.print_test("Shorten URL", False, f"Error: {e}")
            return None

    def test_shorten_idempotent(self, url: str, key: str) -> bool:
        """Shortening the same URL again returns the same key."""
        try:
            response = self._shorten(url)
            again = response.json().get("key") if response.status_code == 200 else None
            passed = again == key
            self.print_test("Idempotent Shorten", passed, f"First: {key}, Second: {again}")
            return passed
        except (requests.RequestException, ValueError) as e:
            self.print_test("Idempotent Shorten", False, f"Error: {e}")
            return False

    def test_redirect(self, key: str, expected: str) -> bool:
        """GET /go/<key> answers 301 to the http://-prefixed URL."""
        try:
            response = self.session.get(
                f"{self.base_url}/go/{key}",
                allow_redirects=False,
                timeout=self.timeout,
            )
            location = response.headers.get("Location", "")
            passed = response.status_code == 301 and location == expected
            self.print_test(
                "Redirect",
                passed,
                f"Status: {response.status_code}, Location: {location or 'none'}",
            )
            return passed
        except requests.RequestException as e:
            self.print_test("Redirect", False, f"Error: {e}")
            return False

    def test_unknown_key(self) -> bool:
        """GET /go/unknownkey answers 404."""
        try:
            response = self.session.get(
                f"{self.base_url}/go/unknownkey",
                allow_redirects=False,
                timeout=self.timeout,
            )
            passed = response.status_code == 404
            self.print_test("Unknown Key", passed, f"Status: {response.status_code} (expected 404)")
            return passed
        except requests.RequestException as e:
            self.print_test("Unknown Key", False, f"Error: {e}")
            return False

    def test_malformed_body(self) -> bool:
        """POST /shorten with a non-JSON body answers 400."""
        try:
            response = self.session.post(
                f"{self.base_url}/shorten",
                data="not json",
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            passed = response.status_code == 400
            self.print_test("Malformed Body", passed, f"Status: {response.status_code} (expected 400)")
            return passed
        except requests.RequestException as e:
            self.print_test("Malformed Body", False, f"Error: {e}")
            return False

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("URL Shortener Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.test_landing_page():
            print("\nLanding page check failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False

        print()

        target = f"example.com/validate/{int(time.time())}"
        key = self.test_shorten_schemeless(target)
        if key:
            self.test_shorten_idempotent(target, key)
            self.test_redirect(key, f"http://{target}")

        print()

        self.test_unknown_key()
        self.test_malformed_body()

        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        """Print test summary."""
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {failed}")
        if total:
            print(f"Success Rate: {(passed/total*100):.1f}%")

        if failed > 0:
            print("\nFailed tests:")
            for name, ok in self.test_results:
                if not ok:
                    print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate URL Shortener service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:8080",
        help="Base URL of the service (default: http://localhost:8080)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nValidation interrupted by user")
        sys.exit(2)


if __name__ == "__main__":
    main()
