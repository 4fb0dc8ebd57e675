import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from html_compare.core.html_parser import HTMLParser
from html_compare.core.nodes import Comment, Element, Text


def get_first_element(tree):
    # Helper to get the first element child of the root
    for child in tree.children:
        if isinstance(child, Element):
            return child
    return tree


def attr_dict(element):
    return {attr.name: attr.value for attr in element.attrs}


def test_html_tag_and_attribute_extraction():
    parser = HTMLParser()
    tree = parser.parse('<div id="main" class="foo bar"><span data-x="1">Hello</span></div>')
    assert tree.tag == '[document]'
    div = get_first_element(tree)
    assert div.tag == 'div'
    assert attr_dict(div) == {'id': 'main', 'class': 'foo bar'}
    span = div.children[0]
    assert span.tag == 'span'
    assert attr_dict(span) == {'data-x': '1'}
    assert span.children == [Text('Hello')]


def test_html_stray_text_is_root_child():
    tree = HTMLParser().parse('Hello')
    assert tree.children == [Text('Hello')]


def test_html_empty_input():
    tree = HTMLParser().parse('')
    assert tree.tag == '[document]'
    assert tree.children == []


def test_html_unclosed_tags_are_closed():
    tree = HTMLParser().parse('<div><span>Hi')
    div = get_first_element(tree)
    assert div.tag == 'div'
    assert div.children[0].tag == 'span'
    assert div.children[0].children == [Text('Hi')]


def test_html_implied_paragraph_end():
    tree = HTMLParser().parse('<div><p>one<p>two</div>')
    div = get_first_element(tree)
    assert [child.tag for child in div.children] == ['p', 'p']
    assert div.children[1].children == [Text('two')]


def test_html_self_closing_div_is_open_tag():
    tree = HTMLParser().parse('<div/>')
    div = get_first_element(tree)
    assert div.tag == 'div'
    assert div.children == []


def test_html_tag_names_are_lowercased():
    tree = HTMLParser().parse('<DIV CLASS="x"></DIV>')
    div = get_first_element(tree)
    assert div.name == 'div'
    assert attr_dict(div) == {'class': 'x'}


def test_html_with_comments():
    tree = HTMLParser().parse('<!--lead--><div><!-- comment --><span>Hi</span></div>')
    assert tree.children[0] == Comment('lead')
    div = tree.children[1]
    assert div.children[0] == Comment(' comment ')
    assert div.children[1].tag == 'span'


def test_html_multiple_root_elements():
    tree = HTMLParser().parse('<div>1</div><div>2</div>')
    assert [child.tag for child in tree.children] == ['div', 'div']


def test_html_head_content_in_fragment_keeps_order():
    tree = HTMLParser().parse('<title>T</title><p>x</p>')
    assert [child.tag for child in tree.children] == ['title', 'p']


def test_html_full_document_keeps_html_element():
    html = '<!DOCTYPE html><html lang="en"><head><title>T</title></head><body><p>x</p></body></html>'
    tree = HTMLParser().parse(html)
    assert len(tree.children) == 1
    document = tree.children[0]
    assert document.tag == 'html'
    assert attr_dict(document) == {'lang': 'en'}
    assert [child.tag for child in document.children] == ['head', 'body']


def test_html_document_detection():
    assert HTMLParser.is_document('<!doctype html><p>x</p>')
    assert HTMLParser.is_document('  <!-- c -->\n<html><body></body></html>')
    assert not HTMLParser.is_document('<p>x</p>')
    assert not HTMLParser.is_document('<htmlx>')


def test_html_duplicate_attributes_keep_first():
    tree = HTMLParser().parse('<div id="a" id="b"></div>')
    assert attr_dict(get_first_element(tree)) == {'id': 'a'}


def test_html_entities_are_decoded():
    tree = HTMLParser().parse('<p>&lt;b&gt; &amp; &#34;q&#34;</p>')
    assert get_first_element(tree).children == [Text('<b> & "q"')]


def test_html_parse_file(tmp_path):
    path = tmp_path / 'page.html'
    path.write_text('<p>saved</p>', encoding='utf-8')
    tree = HTMLParser().parse_file(path)
    assert get_first_element(tree).children == [Text('saved')]


def test_html_rejects_non_string_input():
    with pytest.raises(TypeError):
        HTMLParser().parse(b'<p>bytes</p>')


def test_html_round_trip_snapshot():
    tree = HTMLParser().parse('<p class="a">x &amp; y<br></p>')
    assert tree.to_html() == '<p class="a">x &amp; y<br></p>'


def test_html_body_start_is_document():
    assert HTMLParser.is_document('<body class="x"><p>a</p>')
    assert HTMLParser.is_document('<head><title>T</title></head>')
    assert not HTMLParser.is_document('<bodyx>')


def test_html_body_attributes_kept_for_documents():
    tree = HTMLParser().parse('<body class="x"><p>a</p></body>')
    document = tree.children[0]
    assert document.tag == 'html'
    body = document.children[1]
    assert body.tag == 'body'
    assert attr_dict(body) == {'class': 'x'}


def test_html_document_parsed_as_fragment():
    html = '<!DOCTYPE html><html lang="en"><head><title>T</title></head><body><p>x</p></body></html>'
    tree = HTMLParser().parse(html, as_fragment=True)
    assert [child.tag for child in tree.children] == ['title', 'p']


def test_html_deeply_nested_markup():
    depth = 1000
    tree = HTMLParser().parse('<div>' * depth + 'x' + '</div>' * depth)
    node = tree
    for _ in range(depth):
        node = node.children[0]
        assert node.tag == 'div'
    assert node.children == [Text('x')]
    assert tree.to_html() == '<div>' * depth + 'x' + '</div>' * depth
