"""
Vanity import path resolution

Module paths like 'fyne.io/fyne/v2' are served by a vanity URL service that
points the Go tool at the real repository with a go-import meta tag:

    <meta name="go-import" content="fyne.io/fyne git https://github.com/fyne-io/fyne">

Resolution is best-effort: every failure means "no redirect found"
"""

import re
import time

import requests

from gobin_info.common.defaults import ResolverConfig
from gobin_info.common.input_validation import InputValidator, ValidationError

# Optional request hook for testing. When set via set_request_fn, the resolver
# calls it to obtain the raw response body for a URL instead of performing real
# network I/O. The function signature is: fn(url: str) -> bytes | str | None
_REQUEST_FN = None


def set_request_fn(fn):
    """
    Set a custom request function for testing to avoid outbound network calls

    Args:
        fn (callable): Function taking url string and returning bytes/str/None
    """
    global _REQUEST_FN
    _REQUEST_FN = fn


# Captures the redirect URL (third field of the content attribute)
_RE_GO_IMPORT_META = re.compile(
    r'<\s*meta\s+name=["\']go-import["\']\s+content=["\']\s*[^"\'\s]+\s+\w+\s+(https?://[^"\'\s]+)\s*["\']\s*/?\s*>',
    re.IGNORECASE,
)
_RE_PROTOCOL = re.compile(r"^https?://", re.IGNORECASE)
_HEAD_END = "</head>"


class ResponseLimitError(requests.RequestException):
    """Raised when a vanity page exceeds the size or time bounds while streaming"""

    pass


def _vanity_fetch_url(package_path):
    """
    Return 'https://{package_path}'

    The package path is used instead of the module path because it's what
    `go install` requests, so it's what vanity services register
    """
    return f"https://{package_path}"


def _decode(line):
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="ignore")
    return line


def _hook_lines(url):
    """Yield body lines produced by the test request hook"""
    raw = _REQUEST_FN(url)
    if raw is None:
        raise requests.ConnectionError(f"No response for {url}")
    yield from _decode(raw).splitlines()


def _iter_response_lines(url):
    """
    Lazily yield the lines of the document at url

    The body is streamed, not read whole; only the <head> is of interest and
    the caller stops consuming at its end. Non-2xx responses are still yielded.
    Lines are decoded as UTF-8 regardless of the declared charset

    Reading stops early once ResolverConfig.MAX_RESPONSE_BYTES have been read
    or ResolverConfig.RESPONSE_DEADLINE has passed

    Raises:
        requests.RequestException: On connection errors, timeouts, or broken streams
    """
    if _REQUEST_FN is not None:
        yield from _hook_lines(url)
        return

    deadline = time.monotonic() + ResolverConfig.RESPONSE_DEADLINE
    received = 0
    with requests.get(
        url,
        headers={"User-Agent": ResolverConfig.USER_AGENT},
        timeout=ResolverConfig.REQUEST_TIMEOUT,
        stream=True,
    ) as response:
        for line in response.iter_lines():
            received += len(line) + 1
            if received > ResolverConfig.MAX_RESPONSE_BYTES:
                raise ResponseLimitError(f"{url} sent more than {ResolverConfig.MAX_RESPONSE_BYTES} bytes")
            if time.monotonic() > deadline:
                raise ResponseLimitError(f"{url} took longer than {ResolverConfig.RESPONSE_DEADLINE}s to send")
            yield _decode(line)


def find_go_import_redirect(lines):
    """
    Scan document lines for the go-import meta tag

    Args:
        lines (Iterable[str]): Lines of an HTML document

    Returns:
        str: The captured redirect URL, or '' if the head ends (or the document
        ends) without a go-import tag
    """
    for line in lines:
        match = _RE_GO_IMPORT_META.search(line)
        if match:
            return match.group(1)
        # The meta tag is only valid inside the head
        if _HEAD_END in line.lower():
            return ""
    return ""


def normalize_redirect_target(redirect_url):
    """
    Turn a redirect URL into a protocol-less path like 'github.com/owner/repo'

    Args:
        redirect_url (str): URL captured from the go-import tag

    Returns:
        str: Host and path without protocol, trailing slash, or '.git' suffix
    """
    target = _RE_PROTOCOL.sub("", redirect_url)
    target = target.rstrip("/")
    if target.endswith(".git"):
        target = target[:-4]
    return target


def resolve_vanity_url(package_path, domain, logger=None):
    """
    Resolve a vanity import path to the location of its repository

    Never raises; network errors, missing meta tags, and invalid redirect URLs
    all result in an empty string

    Args:
        package_path (str): Package path as embedded in the binary
        domain (str): First segment of the module path, used for logging
        logger (Logger): Optional logger instance

    Returns:
        str: Redirect target without protocol (e.g. 'github.com/fyne-io/fyne'),
        or '' if no redirect was found
    """
    url = _vanity_fetch_url(package_path)
    logger and logger.debug(f"Checking {url} for a vanity URL redirect ({domain} isn't a known Git provider)")

    lines = _iter_response_lines(url)
    try:
        redirect = find_go_import_redirect(lines)
    except requests.RequestException as e:
        logger and logger.debug(f"Vanity URL lookup failed for {url}: {e}")
        return ""
    except ValueError as e:
        # Covers URLs requests refuses to build
        logger and logger.debug(f"Couldn't read response from {url}: {e}")
        return ""
    finally:
        # Closes the streamed response if scanning stopped early
        lines.close()

    if not redirect:
        logger and logger.debug(f"No go-import meta tag found at {url}")
        return ""

    try:
        InputValidator.validate_url(redirect, allowed_schemes={"https", "http"})
    except ValidationError as e:
        logger and logger.debug(f"Ignoring invalid vanity URL redirect {redirect!r} from {url}: {e}")
        return ""

    target = normalize_redirect_target(redirect)
    logger and logger.debug(f"Vanity URL {package_path} redirects to {target}")
    return target
