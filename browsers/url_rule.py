"""URL rules of the form ``[scheme://]hostname[/path][?query][#fragment]``.

Every part of a rule is a glob. Hostname labels and query parameters are
treated like path components, so ``*`` matches within one label or
parameter and ``**`` matches across several of them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

logger = logging.getLogger(__name__)

_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})


def _class_to_regex(pattern: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class starting at ``start``; return regex and next index."""
    i = start + 1
    negate = False
    if i < len(pattern) and pattern[i] in "!^":
        negate = True
        i += 1
    members: list[str] = []
    # A closing bracket right after the opening one is a literal member.
    if i < len(pattern) and pattern[i] == "]":
        members.append("]")
        i += 1
    while i < len(pattern) and pattern[i] != "]":
        members.append(pattern[i])
        i += 1
    if i >= len(pattern):
        raise ValueError("unclosed character class")
    parts = []
    for pos, ch in enumerate(members):
        if ch == "-" and 0 < pos < len(members) - 1:
            parts.append("-")
        else:
            parts.append(re.escape(ch))
    body = "".join(parts)
    return ("[^" if negate else "[") + body + "]", i + 1


def _translate(pattern: str) -> str:
    out: list[str] = []
    n = len(pattern)
    i = 0
    in_alternate = False
    while i < n:
        ch = pattern[i]
        if ch == "*":
            if pattern.startswith("**", i):
                after = i + 2
                starts_component = i == 0 or pattern[i - 1] == "/"
                at_end = after == n
                before_sep = after < n and pattern[after] == "/"
                if starts_component and (at_end or before_sep) and not in_alternate:
                    if i == 0 and at_end:
                        out.append(".*")
                        i = after
                    elif i == 0:
                        out.append("(?:/?|.*/)")
                        i = after + 1
                    elif at_end:
                        out.pop()
                        out.append("/.*")
                        i = after
                    else:
                        out.pop()
                        out.append("(?:/|/.*/)")
                        i = after + 1
                    continue
                out.append("[^/]*")
                i = after
                continue
            out.append("[^/]*")
            i += 1
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "[":
            regex, i = _class_to_regex(pattern, i)
            out.append(regex)
        elif ch == "{":
            if in_alternate:
                raise ValueError("nested alternate groups are not allowed")
            in_alternate = True
            out.append("(?:")
            i += 1
        elif ch == "}":
            if not in_alternate:
                raise ValueError("unopened alternate group")
            in_alternate = False
            out.append(")")
            i += 1
        elif ch == "," and in_alternate:
            out.append("|")
            i += 1
        elif ch == "\\":
            if i + 1 >= n:
                raise ValueError("dangling escape")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(ch))
            i += 1
    if in_alternate:
        raise ValueError("unclosed alternate group")
    return "".join(out)


def compile_glob(pattern: str, name: str) -> re.Pattern[str]:
    """Compile a case-insensitive glob in which wildcards do not cross ``/``."""
    try:
        return re.compile(_translate(pattern), re.IGNORECASE | re.DOTALL)
    except (ValueError, re.error) as exc:
        raise ValueError(f"illegal pattern for {name}") from exc


@dataclass(frozen=True)
class _TargetUrl:
    scheme: str
    hostname: str
    path: str
    query: str
    fragment: str

    @classmethod
    def from_split(cls, url: SplitResult) -> _TargetUrl:
        if not url.hostname:
            raise ValueError(f"no host found from url: {url.geturl()}")
        path = url.path
        if not path and url.scheme.lower() in _SPECIAL_SCHEMES:
            path = "/"
        return cls(
            scheme=url.scheme.lower(),
            hostname=url.hostname,
            path=path,
            query=url.query,
            fragment=url.fragment,
        )


def _parse_url(url_str: str) -> SplitResult:
    try:
        url = urlsplit(url_str)
    except ValueError as exc:
        raise ValueError(f"not a valid url: {url_str}") from exc
    if not url.scheme or not url.netloc:
        raise ValueError(f"not a valid url: {url_str}")
    return url


@dataclass(frozen=True)
class UrlGlobMatcher:
    """Compiled globs for each part of a URL rule."""

    scheme: re.Pattern[str]
    hostname: re.Pattern[str]
    path: re.Pattern[str]
    query: re.Pattern[str]
    fragment: re.Pattern[str]

    def url_str_matches(self, url_str: str) -> bool:
        """Return whether the URL given as text matches; raise ValueError if it is not a URL."""
        return self.url_matches(_parse_url(url_str))

    def url_matches(self, url: SplitResult | str) -> bool:
        """Return whether every part of ``url`` matches its glob."""
        if isinstance(url, str):
            url = _parse_url(url)
        target = _TargetUrl.from_split(url)
        return (
            self.scheme.fullmatch(target.scheme) is not None
            and self.hostname.fullmatch(target.hostname.replace(".", "/")) is not None
            and self.path.fullmatch(target.path) is not None
            and self.query.fullmatch(target.query.replace("&", "/")) is not None
            and self.fragment.fullmatch(target.fragment) is not None
        )


@dataclass(frozen=True)
class UrlMatcher:
    """The glob pattern of each part of a URL rule."""

    scheme: str
    hostname: str
    path: str
    query: str
    fragment: str

    def to_glob_matcher(self) -> UrlGlobMatcher:
        """Compile the patterns into a matcher."""
        return UrlGlobMatcher(
            scheme=compile_glob(self.scheme, "scheme"),
            # "my.path.**" -> "my/path/**"
            hostname=compile_glob(self.hostname.replace(".", "/"), "hostname"),
            path=compile_glob(self.path, "path"),
            # "name=ferret&color=purple" -> "name=ferret/color=purple"
            query=compile_glob(self.query.replace("&", "/"), "query"),
            fragment=compile_glob(self.fragment, "fragment"),
        )


def _split_once(text: str, separator: str, what: str) -> tuple[str, str]:
    index = text.find(separator)
    if index < 0:
        raise ValueError(f"no {what} with {separator} suffix")
    return text[:index], text[index + len(separator):]


def extract_part_matchers(full_rule: str) -> UrlMatcher:
    """Split a full rule ``scheme://hostname/path?query#fragment`` into its parts."""
    scheme, after_scheme = _split_once(full_rule, "://", "scheme")
    slash = after_scheme.find("/")
    if slash < 0:
        raise ValueError("no hostname with / suffix")
    hostname, after_hostname = after_scheme[:slash], after_scheme[slash:]
    path, after_path = _split_once(after_hostname, "?", "path")
    query, fragment = _split_once(after_path, "#", "query")
    return UrlMatcher(
        scheme=scheme,
        hostname=hostname,
        path=path,
        query=query,
        fragment=fragment,
    )


def transform_to_full_match(rule: str) -> str:
    """Fill in wildcards for every part of ``rule`` that is left out."""
    if "://" not in rule:
        rule = "*://" + rule
    after_scheme = rule[rule.index("://") + 3:]
    if "/" not in after_scheme:
        rule += "/**"  # a path can have many parts
    if "?" not in rule:
        rule += "?**"  # a query can have many parameters
    if "#" not in rule:
        rule += "#*"  # a fragment has only one part
    return rule


def to_url_matcher(rule: str) -> UrlMatcher:
    """Parse a user-written rule into its part patterns."""
    matcher = extract_part_matchers(transform_to_full_match(rule))
    logger.debug("parsed url matcher: %r", matcher)
    return matcher