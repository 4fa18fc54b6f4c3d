from dataclasses import replace

from memohub.domain.models import ExportFormat, ExportOptions, UrlInfo
from memohub.services.exporters.print_exporter import PrintExporter


def test_page_is_a_full_html_document(note, options, context):
    out = PrintExporter().render(note, options, context)
    assert out.lstrip().lower().startswith("<!doctype html>")
    assert "<title>Weekly</title>" in out
    assert "<h1>Weekly</h1>" in out


def test_instructions_name_the_pdf_and_are_hidden_in_print(note, context):
    opts = ExportOptions.for_note(note, ExportFormat.PRINTABLE)
    opts.file_name = "weekly-report"
    out = PrintExporter().render(note, opts, context)
    assert 'id="instructions"' in out
    assert "<code>weekly-report.pdf</code>" in out
    assert ".instructions" in out and "display:none" in out.replace(" ", "")


def test_print_script_uses_configured_delay(note, options, context):
    out = PrintExporter(print_delay_ms=750).render(note, options, context)
    assert "window.print()" in out
    assert "750" in out


def test_user_strings_are_escaped(note, options, context):
    hostile = replace(
        note,
        title="<script>alert(1)</script>",
        content='a < b & "c"',
        urls=[UrlInfo('"><img src=x>', "https://x.example/?a=1&b=2")],
    )
    ctx = replace(context, category_path="<b>Work</b>", tag_names=["<i>"])
    out = PrintExporter().render(hostile, options, ctx)

    # the page's own print script is the only <script> element
    assert out.count("<script>") == 1
    assert "<script>alert(1)</script>" not in out
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in out
    assert "a &lt; b &amp; &quot;c&quot;" in out
    assert "&lt;b&gt;Work&lt;/b&gt;" in out
    assert "#&lt;i&gt;" in out
    assert "<img src=x>" not in out
    assert 'href="https://x.example/?a=1&amp;b=2"' in out


def test_body_is_stripped_and_line_broken(note, no_meta_options, context):
    n = replace(note, content="# Head\n**bold** line\n- item")
    out = PrintExporter().render(n, no_meta_options, context)
    assert '<div class="content">Head<br>\nbold line<br>\n• item</div>' in out


def test_metadata_block_follows_flags(note, options, context, no_meta_options):
    full = PrintExporter().render(note, options, context)
    assert '<div class="meta">' in full
    assert "<p>カテゴリ: Work &gt; Meetings</p>" in full
    assert "<p>タグ: #a #b</p>" in full

    bare = PrintExporter().render(note, no_meta_options, context)
    assert '<div class="meta">' not in bare
    assert '<div class="urls">' not in bare


def test_url_links_open_safely(note, options, context):
    out = PrintExporter().render(note, options, context)
    assert (
        '<a href="https://d.example" target="_blank" rel="noopener noreferrer">Docs</a>' in out
    )
    assert ">https://x.example</a>" in out


def test_instructions_use_sanitized_title_when_name_is_blank(note, options, context):
    n = replace(note, title="My/Notes:Test")
    for blank in ("", "   "):
        options.file_name = blank
        out = PrintExporter().render(n, options, context)
        assert "<code>My_Notes_Test.pdf</code>" in out
        assert "<code>   .pdf</code>" not in out


def test_title_ampersand_and_quotes_are_escaped(note, options, context):
    n = replace(note, title='Q&A "draft" <v2>')
    out = PrintExporter().render(n, options, context)
    assert "<h1>Q&amp;A &quot;draft&quot; &lt;v2&gt;</h1>" in out
    assert "<title>Q&amp;A &quot;draft&quot; &lt;v2&gt;</title>" in out
    assert 'Q&A "draft"' not in out
