"""Rewrite GitHub attachment URLs to the local filenames they were downloaded to."""

import re
from typing import Mapping


def attachment_filename(local_path: str) -> str:
    """Final path segment of a local path, or the whole path if it has no separator."""
    return local_path.split("/")[-1] or local_path


def replace_attachment_urls(text: str, url_map: Mapping[str, str]) -> str:
    """
    Replace every mapped attachment URL in text with its local filename.

    HTML img sources (src="URL" or src='URL') are always re-emitted with
    double quotes; any other occurrence, e.g. markdown ![img](URL), is
    replaced in place. URLs absent from the map are left alone.
    """
    result = text
    # Longest first, so a URL that prefixes another mapped URL can't clobber it
    for url in sorted(url_map, key=len, reverse=True):
        if not url:
            continue
        filename = attachment_filename(url_map[url])
        escaped = re.escape(url)

        result = re.sub(
            r"""src=(["'])""" + escaped + r"\1",
            lambda _: f'src="{filename}"',
            result,
        )
        result = re.sub(escaped, lambda _: filename, result)

    return result
