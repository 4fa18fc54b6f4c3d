from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from datetime import date

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor, Twips
from docx.text.paragraph import Paragraph as DocxParagraph
from docx.text.run import Run

from memohub.domain.models import WordExportNote
from memohub.parsing.blocks import (
    BlankLine,
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListItem,
    ListKind,
    Paragraph,
    parse_blocks,
)
from memohub.parsing.inline import Bold, Code, InlineRun, Italic, Link
from memohub.utils.constants import (
    DEFAULT_CODE_FONT,
    DEFAULT_DOCUMENT_LABEL,
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    LABEL_CATEGORY,
    LABEL_CREATED_SHORT,
    LABEL_FAVORITE,
    LABEL_LINKS,
    LABEL_PRIORITY,
    LABEL_TAGS,
    LABEL_UPDATED_SHORT,
    PRIORITY_LABELS,
)
from memohub.utils.naming import batch_file_stem, sanitize_file_name

logger = logging.getLogger(__name__)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

CHECKED_BOX = "☑ "
UNCHECKED_BOX = "☐ "
BULLET = "• "

LINK_COLOR = RGBColor(0x05, 0x63, 0xC1)
MUTED = RGBColor(0x66, 0x66, 0x66)
FAINT = RGBColor(0x88, 0x88, 0x88)
CODE_FILL = "F5F5F5"
RULE_COLOR = "CCCCCC"
QUOTE_COLOR = "999999"

# (space before, space after) in twips per heading level
_HEADING_SPACING = {1: (240, 120), 2: (200, 100), 3: (160, 80), 4: (120, 60)}

# theme references override explicit font names
_THEME_FONT_ATTRS = ("w:asciiTheme", "w:hAnsiTheme", "w:eastAsiaTheme", "w:cstheme")

# pPr children that must follow w:pBdr / w:shd (ECMA-376 sequence order)
_PPR_AFTER_SHD = (
    "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap", "w:overflowPunct",
    "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN", "w:bidi", "w:adjustRightInd",
    "w:snapToGrid", "w:spacing", "w:ind", "w:contextualSpacing", "w:mirrorIndents",
    "w:suppressOverlap", "w:jc", "w:textDirection", "w:textAlignment",
    "w:textboxTightWrap", "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr",
    "w:sectPr", "w:pPrChange",
)


def priority_label(priority: int) -> str:
    return PRIORITY_LABELS.get(priority, "-")


# ---------------------------------------------------------------------------
# Low-level OOXML helpers
# ---------------------------------------------------------------------------


def _shading(fill: str):
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    return shd


def _set_paragraph_borders(paragraph: DocxParagraph, color: str, size: int, *sides: str) -> None:
    pPr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    for side in ("top", "left", "bottom", "right"):
        if side not in sides:
            continue
        edge = OxmlElement(f"w:{side}")
        edge.set(qn("w:val"), "single")
        edge.set(qn("w:sz"), str(size))
        edge.set(qn("w:space"), "4")
        edge.set(qn("w:color"), color)
        borders.append(edge)
    pPr.insert_element_before(borders, "w:shd", *_PPR_AFTER_SHD)


def _set_paragraph_shading(paragraph: DocxParagraph, fill: str) -> None:
    pPr = paragraph._p.get_or_add_pPr()
    pPr.insert_element_before(_shading(fill), *_PPR_AFTER_SHD)


def _pin_fonts(rfonts, name: str) -> None:
    for attr in _THEME_FONT_ATTRS:
        rfonts.attrib.pop(qn(attr), None)
    for attr in ("w:ascii", "w:hAnsi", "w:eastAsia", "w:cs"):
        rfonts.set(qn(attr), name)


def _set_run_font(run: Run, name: str) -> None:
    run.font.name = name
    # East Asian text ignores w:ascii/w:hAnsi, so the eastAsia slot is set too
    run._element.get_or_add_rPr().get_or_add_rFonts().set(qn("w:eastAsia"), name)


def _add_field(paragraph: DocxParagraph, instruction: str, size: Pt, color: RGBColor) -> None:
    for kind in ("begin", "instr", "end"):
        run = paragraph.add_run()
        run.font.size = size
        run.font.color.rgb = color
        if kind == "instr":
            instr = OxmlElement("w:instrText")
            instr.set(qn("xml:space"), "preserve")
            instr.text = f" {instruction} "
            run._r.append(instr)
        else:
            fld = OxmlElement("w:fldChar")
            fld.set(qn("w:fldCharType"), kind)
            run._r.append(fld)


def _add_hyperlink(paragraph: DocxParagraph, url: str, text: str) -> Run:
    r_id = paragraph.part.relate_to(url, RT.HYPERLINK, is_external=True)
    link = OxmlElement("w:hyperlink")
    link.set(qn("r:id"), r_id)
    run = paragraph.add_run(text)
    run.font.color.rgb = LINK_COLOR
    run.font.underline = True
    # add_run() placed the run in the paragraph; re-parent it under the hyperlink
    link.append(run._r)
    paragraph._p.append(link)
    return run


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class WordDocumentGenerator:
    """
    Renders one or more notes into a single paginated .docx document.

    Each note gets a title, a metadata summary, its links and then its body as
    parsed by the block parser. Notes after the first start on a new page. The
    running header carries the document label; the footer shows "Page N / M".
    """

    file_ext = "docx"
    mime_type = DOCX_MIME

    def __init__(
        self,
        *,
        document_label: str = DEFAULT_DOCUMENT_LABEL,
        font_name: str = DEFAULT_FONT_NAME,
        font_size: int = DEFAULT_FONT_SIZE,
        code_font: str = DEFAULT_CODE_FONT,
    ) -> None:
        self.document_label = document_label
        self.font_name = font_name
        self.font_size = font_size
        self.code_font = code_font

    # ----- public API -----

    def build(self, notes: Sequence[WordExportNote]) -> DocxDocument:
        doc = Document()
        self._apply_default_font(doc)
        self._add_header_footer(doc)
        for index, note in enumerate(notes):
            self._add_note(doc, note, page_break=index > 0)
        logger.debug("Built Word document with %d note(s)", len(notes))
        return doc

    def render_bytes(self, notes: Sequence[WordExportNote]) -> bytes:
        buf = io.BytesIO()
        self.build(notes).save(buf)
        return buf.getvalue()

    def file_name_for(self, notes: Sequence[WordExportNote], today: date | None = None) -> str:
        if len(notes) == 1:
            return f"{sanitize_file_name(notes[0].title)}.{self.file_ext}"
        return f"{batch_file_stem(today)}.{self.file_ext}"

    # ----- document chrome -----

    def _apply_default_font(self, doc: DocxDocument) -> None:
        styles = doc.styles
        defaults = styles.element.find(qn("w:docDefaults"))
        if defaults is not None:
            for rfonts in defaults.iter(qn("w:rFonts")):
                _pin_fonts(rfonts, self.font_name)

        normal = styles["Normal"]
        normal.font.size = Pt(self.font_size)
        _pin_fonts(normal.element.get_or_add_rPr().get_or_add_rFonts(), self.font_name)
        # built-in headings point at theme fonts, which win over Normal
        for level in _HEADING_SPACING:
            heading = styles[f"Heading {level}"]
            _pin_fonts(heading.element.get_or_add_rPr().get_or_add_rFonts(), self.font_name)

    def _add_header_footer(self, doc: DocxDocument) -> None:
        section = doc.sections[0]

        header = section.header.paragraphs[0]
        header.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        run = header.add_run(self.document_label)
        run.font.size = Pt(9)
        run.font.color.rgb = FAINT

        footer = section.footer.paragraphs[0]
        footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
        for is_field, piece in ((False, "Page "), (True, "PAGE"), (False, " / "), (True, "NUMPAGES")):
            if is_field:
                _add_field(footer, piece, Pt(9), FAINT)
                continue
            run = footer.add_run(piece)
            run.font.size = Pt(9)
            run.font.color.rgb = FAINT

    # ----- per note -----

    def _add_note(self, doc: DocxDocument, note: WordExportNote, *, page_break: bool) -> None:
        title = doc.add_paragraph(style="Heading 1")
        title.paragraph_format.page_break_before = page_break
        title.paragraph_format.space_after = Twips(200)
        run = title.add_run(note.title)
        run.bold = True
        run.font.size = Pt(16)
        _set_run_font(run, self.font_name)

        summary = [f"{LABEL_CATEGORY}: {note.category}", f"{LABEL_PRIORITY}: {priority_label(note.priority)}"]
        if note.is_favorite:
            summary.append(LABEL_FAVORITE)
        if note.tags:
            summary.append(f"{LABEL_TAGS}: {', '.join(note.tags)}")
        self._muted_line(doc, " | ".join(summary), Pt(10), MUTED, after=100)

        stamps = f"{LABEL_CREATED_SHORT}: {note.created_at} | {LABEL_UPDATED_SHORT}: {note.updated_at}"
        self._muted_line(doc, stamps, Pt(9), FAINT, after=200)

        if note.urls:
            heading = doc.add_paragraph()
            heading.paragraph_format.space_before = Twips(100)
            heading.paragraph_format.space_after = Twips(60)
            run = heading.add_run(LABEL_LINKS)
            run.bold = True
            run.font.size = Pt(11)
            for info in note.urls:
                p = doc.add_paragraph()
                p.paragraph_format.left_indent = Twips(360)
                p.paragraph_format.space_after = Twips(60)
                p.add_run(BULLET)
                _add_hyperlink(p, info.url, info.title or info.url)

        rule = doc.add_paragraph()
        _set_paragraph_borders(rule, RULE_COLOR, 6, "bottom")
        rule.paragraph_format.space_before = Twips(100)
        rule.paragraph_format.space_after = Twips(200)

        if note.content:
            for block in parse_blocks(note.content):
                self._add_block(doc, block)

    def _muted_line(self, doc: DocxDocument, text: str, size: Pt, color: RGBColor, *, after: int) -> None:
        p = doc.add_paragraph()
        p.paragraph_format.space_after = Twips(after)
        run = p.add_run(text)
        run.font.size = size
        run.font.color.rgb = color

    # ----- body blocks -----

    def _add_block(self, doc: DocxDocument, block: Block) -> None:
        if isinstance(block, Heading):
            p = doc.add_paragraph(style=f"Heading {block.level}")
            before, after = _HEADING_SPACING[block.level]
            p.paragraph_format.space_before = Twips(before)
            p.paragraph_format.space_after = Twips(after)
            self._add_runs(p, block.runs)
        elif isinstance(block, Blockquote):
            p = doc.add_paragraph()
            _set_paragraph_borders(p, QUOTE_COLOR, 12, "left")
            p.paragraph_format.left_indent = Twips(720)
            p.paragraph_format.space_before = Twips(60)
            p.paragraph_format.space_after = Twips(60)
            self._add_runs(p, block.runs)
        elif isinstance(block, ListItem):
            p = doc.add_paragraph()
            p.paragraph_format.left_indent = Twips(360)
            p.paragraph_format.space_after = Twips(60)
            p.add_run(self._list_marker(block))
            self._add_runs(p, block.runs)
        elif isinstance(block, CodeBlock):
            self._add_code_block(doc, block)
        elif isinstance(block, HorizontalRule):
            p = doc.add_paragraph()
            _set_paragraph_borders(p, RULE_COLOR, 6, "bottom")
            p.paragraph_format.space_before = Twips(120)
            p.paragraph_format.space_after = Twips(120)
        elif isinstance(block, BlankLine):
            doc.add_paragraph().paragraph_format.space_after = Twips(120)
        elif isinstance(block, Paragraph):
            p = doc.add_paragraph()
            p.paragraph_format.space_after = Twips(120)
            self._add_runs(p, block.runs)

    @staticmethod
    def _list_marker(item: ListItem) -> str:
        if item.kind is ListKind.CHECKLIST:
            return CHECKED_BOX if item.checked else UNCHECKED_BOX
        if item.kind is ListKind.ORDERED:
            return f"{item.number}. "
        return BULLET

    def _add_code_block(self, doc: DocxDocument, block: CodeBlock) -> None:
        p = doc.add_paragraph()
        _set_paragraph_borders(p, RULE_COLOR, 4, "top", "left", "bottom", "right")
        _set_paragraph_shading(p, CODE_FILL)
        p.paragraph_format.space_before = Twips(120)
        p.paragraph_format.space_after = Twips(120)
        for i, line in enumerate(block.lines):
            run = p.add_run(line)
            run.font.size = Pt(10)
            _set_run_font(run, self.code_font)
            if i < len(block.lines) - 1:
                run.add_break()

    def _add_runs(self, paragraph: DocxParagraph, runs: Sequence[InlineRun]) -> None:
        for item in runs:
            if not item.text:
                continue
            if isinstance(item, Link):
                _add_hyperlink(paragraph, item.url, item.text)
                continue
            run = paragraph.add_run(item.text)
            if isinstance(item, Bold):
                run.bold = True
            elif isinstance(item, Italic):
                run.italic = True
            elif isinstance(item, Code):
                _set_run_font(run, self.code_font)
                run._element.get_or_add_rPr().append(_shading(CODE_FILL))
