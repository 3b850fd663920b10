from quote_engine.sanitizer import neutralize_css, sanitize


def test_keeps_onerror_but_drops_script():
    result = sanitize('<img src=x onerror=alert(1)><script>alert(2)</script>')
    assert 'onerror="alert(1)"' in result
    assert "<script" not in result
    assert "alert(2)" not in result


def test_drops_other_event_handlers():
    result = sanitize('<div onclick="steal()" onmouseover="x()" class="card">Hi</div>')
    assert result == '<div class="card">Hi</div>'


def test_drops_frames_with_their_content():
    result = sanitize('<p>a</p><iframe src="https://evil.example">fallback</iframe><p>b</p>')
    assert result == "<p>a</p><p>b</p>"


def test_unclosed_script_removes_rest():
    assert sanitize("<p>ok</p><script>alert(1)") == "<p>ok</p>"


def test_nested_script_tags_removed_entirely():
    result = sanitize("<p>ok</p><scr<script>x</script>ipt>alert(1)</script>")
    assert "alert(1)" not in result
    assert result.startswith("<p>ok</p>")


def test_keeps_interactive_hook_attributes():
    html = '<button type="button" data-select-costing="a" aria-label="Select" id="btn">Go</button>'
    result = sanitize(html)
    assert 'data-select-costing="a"' in result
    assert 'aria-label="Select"' in result
    assert 'id="btn"' in result


def test_keeps_form_markup():
    result = sanitize('<label for="n">Name</label><input type="text" id="n" placeholder="Your name">')
    assert 'for="n"' in result
    assert 'placeholder="Your name"' in result


def test_keeps_style_block_and_inline_styles():
    result = sanitize('<style>.hero { color: red; }</style><div style="color: red; max-height: 500px">x</div>')
    assert "<style>" in result
    assert "color: red" in result
    assert "max-height: 500px" in result


def test_strips_javascript_urls():
    result = sanitize('<a href="javascript:alert(1)">x</a>')
    assert "javascript" not in result


def test_keeps_https_and_mailto_links():
    result = sanitize('<a href="https://example.com" target="_blank">x</a><a href="mailto:a@b.c">m</a>')
    assert 'href="https://example.com"' in result
    assert 'target="_blank"' in result
    assert 'href="mailto:a@b.c"' in result


def test_strips_unknown_tags_keeps_text():
    assert sanitize("<blink>Jane</blink>") == "Jane"


def test_strips_comments():
    assert sanitize("<p>a<!-- internal --></p>") == "<p>a</p>"


def test_plain_text_unchanged():
    assert sanitize("Jane Doe") == "Jane Doe"
    assert sanitize(None) == ""
    assert sanitize(5) == ""


def test_neutralize_css():
    assert neutralize_css(".a{}</style><script>") == ".a{}<\\/style><script>"
    assert neutralize_css(None) == ""
    assert neutralize_css(7) == ""
