"""Tests for the header/cookie emitter."""

from conftest import param

from rustgen.header_emitter import emit_headers
from rustgen.model import ArraySchema, GenerationMode, ObjectSchema, Primitive, Property

_DECLARE = "let mut __headers = reqwest::header::HeaderMap::new();"


class TestDeclaration:
    """The header map is always declared."""

    def test_no_params(self):
        assert emit_headers([]) == _DECLARE

    def test_only_query_params(self):
        assert emit_headers([param("q", "query", required=True)]) == _DECLARE


class TestCookies:
    """All cookie parameters fold into one Cookie header."""

    def test_single_insertion_for_many_cookies(self):
        params = [
            param("session", "cookie", required=True),
            param("theme", "cookie"),
            param("lang", "cookie", required=True),
        ]
        snippet = emit_headers(params)
        assert snippet.count("__headers.insert(reqwest::header::COOKIE,") == 1

    def test_each_cookie_uses_its_own_name(self):
        params = [param("session", "cookie", required=True), param("theme", "cookie")]
        assert emit_headers(params) == "\n".join([
            _DECLARE,
            "let __cookie = [",
            '    format!("session={}", session),',
            '    { if let Some(theme) = &theme { format!("theme={}", theme) }'
            " else { String::new() } },",
            "]",
            "    .into_iter()",
            "    .filter(|fragment| !fragment.is_empty())",
            "    .collect::<Vec<String>>()",
            '    .join(";");',
            "if !__cookie.is_empty() {",
            "    __headers.insert(reqwest::header::COOKIE,"
            " reqwest::header::HeaderValue::from_str(&__cookie)?);",
            "}",
        ])

    def test_fragment_order_follows_declaration(self):
        params = [param("b", "cookie", required=True), param("a", "cookie", required=True)]
        snippet = emit_headers(params)
        assert snippet.index('"b={}"') < snippet.index('"a={}"')

    def test_foreign_safe_guard(self):
        snippet = emit_headers([param("theme", "cookie")], GenerationMode.FOREIGN_SAFE)
        assert "if let RSome(theme) = &theme" in snippet


class TestHeaders:
    """Test header parameters by schema kind."""

    def test_required_primitive(self):
        p = param("X-Request-ID", "header", required=True)
        assert emit_headers([p]) == "\n".join([
            _DECLARE,
            '__headers.insert("X-Request-ID",'
            " reqwest::header::HeaderValue::from_str(&x_request_id.to_string())?);",
        ])

    def test_optional_primitive_guarded(self):
        p = param("X-Trace", "header", schema=Primitive("integer"))
        assert emit_headers([p]) == "\n".join([
            _DECLARE,
            "if let Some(x_trace) = &x_trace {",
            '    __headers.insert("X-Trace",'
            " reqwest::header::HeaderValue::from_str(&x_trace.to_string())?);",
            "}",
        ])

    def test_array_joined_with_comma(self):
        p = param("X-Tags", "header", required=True, schema=ArraySchema(Primitive("string")))
        assert emit_headers([p]).splitlines()[1] == (
            '__headers.insert("X-Tags", reqwest::header::HeaderValue::from_str('
            '&x_tags.iter().map(|el| el.to_string()).collect::<Vec<String>>().join(","))?);'
        )

    def test_object_pairs_delimited(self):
        schema = ObjectSchema(properties=(
            Property("role", Primitive("string"), required=True),
            Property("level", Primitive("integer"), required=True),
        ))
        p = param("X-Meta", "header", required=True, schema=schema)
        assert emit_headers([p]).splitlines()[1] == (
            '__headers.insert("X-Meta", reqwest::header::HeaderValue::from_str('
            '&format!("role,{};level,{}", x_meta.role, x_meta.level))?);'
        )

    def test_content_media_type_skipped(self):
        skipped = param("X-Complex", "header", required=True, has_content_media_type=True)
        kept = param("X-Simple", "header", required=True)
        snippet = emit_headers([skipped, kept])
        assert "X-Complex" not in snippet
        assert '"X-Simple"' in snippet

    def test_cookies_before_headers(self):
        params = [param("X-A", "header", required=True), param("sid", "cookie", required=True)]
        snippet = emit_headers(params)
        assert snippet.index("reqwest::header::COOKIE") < snippet.index('"X-A"')


class TestCookieValues:
    """Array and object cookies serialize like header values."""

    def test_array_joined_with_comma(self):
        p = param("ids", "cookie", required=True, schema=ArraySchema(Primitive("integer")))
        assert emit_headers([p]).splitlines()[2] == (
            '    format!("ids={}", ids.iter().map(|el| el.to_string())'
            '.collect::<Vec<String>>().join(",")),'
        )

    def test_optional_array_guarded(self):
        p = param("ids", "cookie", schema=ArraySchema(Primitive("integer")))
        assert emit_headers([p]).splitlines()[2] == (
            '    { if let Some(ids) = &ids { format!("ids={}", ids.iter().map(|el| el.to_string())'
            '.collect::<Vec<String>>().join(",")) } else { String::new() } },'
        )

    def test_object_pairs_delimited(self):
        schema = ObjectSchema(properties=(
            Property("theme", Primitive("string"), required=True),
            Property("fontSize", Primitive("integer"), required=False),
        ))
        p = param("prefs", "cookie", required=True, schema=schema)
        assert emit_headers([p]).splitlines()[2] == (
            '    format!("prefs={}", format!("theme,{};fontSize,{}", prefs.theme,'
            " { if let Some(font_size) = &prefs.font_size { font_size.to_string() }"
            " else { String::new() } })),"
        )

    def test_content_media_type_skipped(self):
        skipped = param("blob", "cookie", required=True, has_content_media_type=True)
        kept = param("sid", "cookie", required=True)
        snippet = emit_headers([skipped, kept])
        assert "blob" not in snippet
        assert 'format!("sid={}", sid),' in snippet

    def test_only_content_typed_cookie_emits_nothing(self):
        p = param("blob", "cookie", required=True, has_content_media_type=True)
        assert emit_headers([p]) == _DECLARE


class TestLocalNames:
    """Parameters named like generated locals keep their own identifiers."""

    def test_header_named_cookie_with_cookie_params(self):
        params = [param("cookie", "header", required=True), param("sid", "cookie", required=True)]
        snippet = emit_headers(params)
        assert "let __cookie = [" in snippet
        assert "from_str(&__cookie)?" in snippet
        assert snippet.splitlines()[-1] == (
            '__headers.insert("cookie",'
            " reqwest::header::HeaderValue::from_str(&cookie.to_string())?);"
        )

    def test_header_named_headers(self):
        p = param("headers", "header")
        assert emit_headers([p]) == "\n".join([
            _DECLARE,
            "if let Some(headers) = &headers {",
            '    __headers.insert("headers",'
            " reqwest::header::HeaderValue::from_str(&headers.to_string())?);",
            "}",
        ])

    def test_cookie_named_cookie(self):
        p = param("cookie", "cookie", required=True)
        assert '    format!("cookie={}", cookie),' in emit_headers([p]).splitlines()
