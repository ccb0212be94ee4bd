from sitekit.attributes import stringify_attributes


def test_empty_attributes_yield_empty_string() -> None:
    assert stringify_attributes([]) == ""
    assert stringify_attributes({}) == ""
    assert stringify_attributes("") == ""
    assert stringify_attributes(None) == ""


def test_string_attributes_pass_through_with_leading_space() -> None:
    assert stringify_attributes("class='x'") == " class='x'"
    assert stringify_attributes("class='x'", js=True) == " class='x'"


def test_mapping_becomes_html_attributes_in_order() -> None:
    assert stringify_attributes({"id": "a"}) == ' id="a"'
    assert stringify_attributes({"type": "text", "name": "q"}) == ' type="text" name="q"'


def test_html_values_are_attribute_escaped() -> None:
    assert stringify_attributes({"title": 'say "hi"'}) == ' title="say&#x20;&quot;hi&quot;"'
    assert stringify_attributes({"tabindex": 3}) == ' tabindex="3"'


def test_key_value_pairs_are_accepted() -> None:
    assert stringify_attributes([("rel", "nofollow"), ("href", "page.html")]) == (
        ' rel="nofollow" href="page.html"'
    )


def test_js_mode_joins_pairs_without_trailing_comma() -> None:
    assert stringify_attributes({"a": "1", "b": "2"}, js=True) == "a=1,b=2"
    assert stringify_attributes({"width": "800"}, js=True) == "width=800"


def test_js_mode_escapes_values() -> None:
    assert stringify_attributes({"msg": "it's"}, js=True) == "msg=it\\x27s"
    assert stringify_attributes({"list": "x,"}, js=True) == "list=x,"


def test_none_values_render_empty() -> None:
    assert stringify_attributes({"title": None}) == ' title=""'
    assert stringify_attributes({"a": None, "b": "2"}, js=True) == "a=,b=2"


def test_zero_string_counts_as_empty() -> None:
    assert stringify_attributes("0") == ""
    assert stringify_attributes({"value": "0"}) == ' value="0"'
