"""
Failure capture: screenshot the tab and upload it to S3.

Capture is best-effort. Screenshot, HTML-dump and upload failures are logged
and never replace the error that triggered the capture.
"""

import logging
import os
import re
from datetime import datetime
from typing import Optional

import boto3

from zac_timesheet.utils import LOGGER_NAME, get_screenshot_path

SCREENSHOT_TIMEOUT = 5_000


def build_object_key(now: datetime, extension: str = "png") -> str:
    """`<YYYY-MM-DD>/<HH_mm_ss_SS>.<ext>`, SS being hundredths of a second."""
    hundredths = now.microsecond // 10_000
    return f"{now:%Y-%m-%d}/{now:%H_%M_%S}_{hundredths:02d}.{extension}"


def _get_s3_client(region: Optional[str] = None):
    if region:
        return boto3.client("s3", region_name=region)
    return boto3.client("s3")


class FailureReporter:
    def __init__(
        self,
        bucket_name: Optional[str] = None,
        logger: logging.Logger = None,
        *,
        region: Optional[str] = None,
        s3_client=None,
        clock=datetime.now,
    ):
        self._bucket_name = bucket_name
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._region = region
        self._s3_client = s3_client
        self._clock = clock

    def capture(self, page, error: BaseException) -> Optional[str]:
        """
        Log the error, save a screenshot of the page (HTML dump if that fails)
        and upload it when a bucket is configured.

        Returns the local path of the saved artifact, or None.
        """
        self._logger.error(f"{type(error).__name__}: {error}", exc_info=error)
        if page is None:
            return None

        try:
            current_url = page.url
        except Exception:
            current_url = "<unavailable>"
        try:
            current_title = page.title()
        except Exception:
            current_title = "<unavailable>"
        self._logger.debug(f"[diag] url={current_url}  title={current_title}")

        now = self._clock()
        path = get_screenshot_path()
        try:
            page.screenshot(path=path, full_page=False, timeout=SCREENSHOT_TIMEOUT)
            self._logger.info(f"📸 Screenshot saved: {path}")
            self._upload(path, build_object_key(now, "png"))
            return path
        except Exception as ss_err:
            self._logger.debug(f"Screenshot failed ({ss_err}) — falling back to HTML dump")

        html_path = re.sub(r"\.png$", ".html", path)
        try:
            html_content = page.content()
            with open(html_path, "w", encoding="utf-8") as f:
                f.write(html_content)
            self._logger.info(f"📄 HTML dump saved: {html_path}")
            self._upload(html_path, build_object_key(now, "html"))
            return html_path
        except Exception as html_err:
            self._logger.warning(f"HTML dump also failed: {html_err}")
            return None

    def _upload(self, path: str, key: str) -> None:
        if not self._bucket_name:
            return
        try:
            if self._s3_client is None:
                self._s3_client = _get_s3_client(self._region)
            with open(path, "rb") as f:
                body = f.read()
            self._s3_client.put_object(Bucket=self._bucket_name, Key=key, Body=body)
            self._logger.info(f"Uploaded {os.path.basename(path)} to s3://{self._bucket_name}/{key}")
        except Exception as err:
            self._logger.warning(f"Upload to s3://{self._bucket_name}/{key} failed: {err}")
