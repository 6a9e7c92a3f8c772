from nowplaying.generator import build_svg
from nowplaying.layout import WrappedRecord, compose_layout
from nowplaying.records import Kind, NormalizedRecord
from nowplaying.svg import escape_xml, render_svg


def test_escape_xml():
    assert escape_xml("""Tom & Jerry's <"Show">""") == "Tom &amp; Jerry&apos;s &lt;&quot;Show&quot;&gt;"
    assert escape_xml(None) == ""


def test_render_svg_document(style):
    layout = compose_layout(
        [
            WrappedRecord("Last Read", ["The Little Prince", "— Antoine de Saint-Exupéry"], "https://example.com/?a=1&b=2"),
            WrappedRecord("Last Watched", ["Hamnet (2025)"]),
        ],
        style,
    )
    svg = render_svg(layout, style)

    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'width="290" height="104"' in svg
    assert 'viewBox="0 0 290 104"' in svg
    assert '<a href="https://example.com/?a=1&amp;b=2" target="_blank" rel="noopener noreferrer">' in svg
    assert svg.count("<a ") == 1
    assert '<tspan class="label">Last Read:</tspan>' in svg
    assert '<tspan class="value" x="146">The Little Prince</tspan>' in svg
    assert '<tspan class="value" x="146" dy="24">— Antoine de Saint-Exupéry</tspan>' in svg
    assert '<text x="0" y="90" class="line" text-anchor="start">' in svg
    assert "font-family: Times New Roman, Times, serif;" in svg
    assert svg.rstrip().endswith("</svg>")


def test_build_svg_escapes_titles(style):
    records = [NormalizedRecord(kind=Kind.READ, primary="Pride & Prejudice", secondary="Jane Austen")]
    svg = build_svg(records, style)
    assert '<tspan class="value" x="146">Pride &amp; Prejudice</tspan>' in svg
    assert '<tspan class="value" x="146" dy="24">— Jane Austen</tspan>' in svg
    assert "overflow" not in svg
