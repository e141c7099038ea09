"""Tests for crumb.http.cookies: the Cookie record, factories and caching."""

import threading

import pytest

from crumb import Cookie, CookieConfig, CookieParseError, JarEntryError, parse_set_cookie
from crumb.http.dates import format_expires

NOW = 1_700_000_000.0


@pytest.fixture
def config() -> CookieConfig:
    return CookieConfig(clock=lambda: NOW)


class TestParse:
    def test_full_example(self) -> None:
        cookie = Cookie()
        ok = cookie.parse(
            "name=value; domain=example.com; path=/; expires=Wed, 21 Oct 2023 07:28:00 GMT; secure; httponly"
        )
        assert ok is True
        assert cookie.name == "name"
        assert cookie.value == "value"
        assert cookie.domain == "example.com"
        assert cookie.path == "/"
        assert cookie.expires == "Wed, 21 Oct 2023 07:28:00 GMT"
        assert cookie.secure is True
        assert cookie.httponly is True
        assert cookie.samesite == ""
        assert cookie.is_session is False

    def test_partitioned(self) -> None:
        cookie = Cookie()
        assert cookie.parse("a=b; Partitioned")
        assert cookie.partitioned is True
        assert cookie.secure is True
        assert cookie.to_header_value() == "a=b; Secure; Partitioned"

    def test_max_age_uses_config_clock(self, config: CookieConfig) -> None:
        cookie = Cookie(config)
        assert cookie.parse("foo=bar; Max-Age=0")
        assert cookie.expires == format_expires(NOW)

    def test_domain_override_with_marker(self) -> None:
        cookie = Cookie()
        assert cookie.parse("a=b", domain="#HttpOnly_example.com")
        assert cookie.domain == "example.com"
        assert cookie.httponly is True

    def test_failure_keeps_name_unset(self) -> None:
        cookie = Cookie()
        assert cookie.parse("") is False
        assert cookie.parse("novalue") is False
        assert cookie.name == ""

    def test_session_cookie(self) -> None:
        cookie = Cookie()
        cookie.parse("a=b")
        assert cookie.is_session is True

    def test_reparse_is_additive(self) -> None:
        cookie = Cookie()
        cookie.parse("a=b; Domain=example.com; SameSite=Lax")
        cookie.parse("c=d; Path=/")
        assert cookie.to_header_value() == "c=d; Domain=example.com; Path=/; SameSite=Lax"


class TestParseSetCookie:
    def test_returns_cookie(self) -> None:
        cookie = parse_set_cookie("sid=abc; Path=/")
        assert cookie.name == "sid"
        assert cookie.path == "/"

    def test_raises_without_name(self) -> None:
        with pytest.raises(CookieParseError) as exc_info:
            parse_set_cookie("; Secure")
        assert exc_info.value.text == "; Secure"

    def test_passes_config(self, config: CookieConfig) -> None:
        cookie = parse_set_cookie("a=b; Max-Age=60", config=config)
        assert cookie.expires == format_expires(NOW + 60)


class TestCreate:
    def test_fields(self) -> None:
        cookie = Cookie.create("name", "value", "example.com", "/", "secure", NOW, "Lax")
        assert cookie.to_header_value() == (
            "name=value; Expires=Tue, 14 Nov 2023 22:13:20 GMT; Domain=example.com; Path=/; SameSite=Lax; Secure"
        )

    def test_defaults_make_session_cookie(self) -> None:
        cookie = Cookie.create("a", "b")
        assert cookie.is_session is True
        assert cookie.to_header_value() == "a=b"

    def test_textual_secure_markers(self) -> None:
        assert Cookie.create("a", "b", secure="TRUE").secure is True
        assert Cookie.create("a", "b", secure="FALSE").secure is False

    def test_samesite_none_forces_secure(self) -> None:
        cookie = Cookie.create("a", "b", secure=False, samesite="None")
        assert cookie.secure is True

    def test_sentinels(self) -> None:
        cookie = Cookie.create("a", "b", domain="#HttpOnly_example.com", path="unknown")
        assert cookie.domain == "example.com"
        assert cookie.httponly is True
        assert cookie.path == ""


class TestFromJarEntry:
    def test_curl_cookielist_line(self) -> None:
        cookie = Cookie.from_jar_entry("#HttpOnly_.example.com\tTRUE\t/\tTRUE\t1700000000\tsid\tabc")
        assert cookie.domain == ".example.com"
        assert cookie.httponly is True
        assert cookie.secure is True
        assert cookie.expires == "Tue, 14 Nov 2023 22:13:20 GMT"
        assert (cookie.name, cookie.value) == ("sid", "abc")

    def test_session_entry(self) -> None:
        cookie = Cookie.from_jar_entry("example.com\tFALSE\tunknown\tFALSE\t0\tsid\tabc")
        assert cookie.is_session is True
        assert cookie.path == ""
        assert cookie.secure is False

    def test_subdomain_column_not_kept(self) -> None:
        wide = Cookie.from_jar_entry(".example.com\tTRUE\t/\tFALSE\t0\tsid\tabc")
        narrow = Cookie.from_jar_entry(".example.com\tFALSE\t/\tFALSE\t0\tsid\tabc")
        assert wide == narrow

    def test_malformed(self) -> None:
        with pytest.raises(JarEntryError):
            Cookie.from_jar_entry("example.com\tFALSE")


class TestAccessors:
    def test_partitioned_setter_forces_secure(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.partitioned = True
        assert cookie.secure is True

    def test_secure_can_be_cleared_afterwards(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.partitioned = True
        cookie.secure = False
        assert cookie.partitioned is True
        assert cookie.secure is False

    def test_samesite_setter_forces_secure(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.samesite = "none"
        assert cookie.secure is True

    def test_domain_setter_strips_marker(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.domain = "#HttpOnly_example.com"
        assert cookie.domain == "example.com"
        assert cookie.httponly is True

    def test_path_setter_unknown(self) -> None:
        cookie = Cookie.create("a", "b", path="/x")
        cookie.path = "unknown"
        assert cookie.path == ""

    def test_expires_literal(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.expires = "Wed, 21 Oct 2023 07:28:00 GMT"
        assert cookie.is_session is False
        cookie.expires = ""
        assert cookie.is_session is True

    def test_set_expires_at_zero_keeps_expiry(self) -> None:
        cookie = Cookie.create("a", "b", expires=NOW)
        cookie.set_expires_at(0)
        assert cookie.expires == format_expires(NOW)


class TestHeaderCache:
    def test_repeated_calls_return_same_string(self) -> None:
        cookie = Cookie.create("a", "b")
        assert cookie.to_header_value() is cookie.to_header_value()

    @pytest.mark.parametrize(
        ("attribute", "value", "fragment"),
        [
            ("name", "z", "z=b"),
            ("value", "z", "a=z"),
            ("domain", "example.com", "Domain=example.com"),
            ("path", "/p", "Path=/p"),
            ("expires", "soon", "Expires=soon"),
            ("secure", True, "Secure"),
            ("httponly", True, "HttpOnly"),
            ("partitioned", True, "Partitioned"),
            ("samesite", "Strict", "SameSite=Strict"),
        ],
    )
    def test_setters_invalidate(self, attribute: str, value: object, fragment: str) -> None:
        cookie = Cookie.create("a", "b")
        assert fragment not in cookie.to_header_value()
        setattr(cookie, attribute, value)
        assert fragment in cookie.to_header_value()

    def test_set_expires_at_invalidates(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.to_header_value()
        cookie.set_expires_at(NOW)
        assert "Expires=Tue, 14 Nov 2023 22:13:20 GMT" in cookie.to_header_value()

    def test_failed_parse_invalidates(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.to_header_value()
        assert cookie.parse("", domain="example.com") is False
        assert cookie.to_header_value() == "a=b; Domain=example.com"

    def test_str_and_repr(self) -> None:
        cookie = Cookie.create("a", "b", path="/")
        assert str(cookie) == "a=b; Path=/"
        assert repr(cookie) == "Cookie('a=b; Path=/')"

    def test_concurrent_readers_see_current_header(self) -> None:
        cookie = Cookie.create("a", "b")
        cookie.path = "/shared"
        results: list[str] = []
        lock = threading.Lock()

        def read() -> None:
            header = cookie.to_header_value()
            with lock:
                results.append(header)

        threads = [threading.Thread(target=read) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert results == ["a=b; Path=/shared"] * 8


class TestRoundTrip:
    @pytest.mark.parametrize(
        "cookie",
        [
            Cookie.create("sid", "abc", "example.com", "/", True, NOW, "Strict"),
            Cookie.create("a", "", "#HttpOnly_example.com", "/docs", False, 0, "None"),
            Cookie.create("token", "x=y=", samesite="Lax"),
        ],
    )
    def test_parse_of_serialized(self, cookie: Cookie) -> None:
        copy = parse_set_cookie(cookie.to_header_value())
        assert copy == cookie

    def test_partitioned_round_trip(self) -> None:
        cookie = Cookie()
        cookie.parse("a=b; Partitioned; HttpOnly")
        assert parse_set_cookie(str(cookie)) == cookie


class TestEquality:
    def test_equal_fields(self) -> None:
        assert Cookie.create("a", "b") == Cookie.create("a", "b")

    def test_different_fields(self) -> None:
        assert Cookie.create("a", "b") != Cookie.create("a", "c")

    def test_not_hashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Cookie())

    def test_snapshot_is_detached(self) -> None:
        cookie = Cookie.create("a", "b")
        snap = cookie.snapshot()
        snap.name = "z"
        assert cookie.name == "a"
