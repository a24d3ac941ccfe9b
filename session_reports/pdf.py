from __future__ import annotations  # Styled PDF rendering for interview results

from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from interview_session.engine import InterviewResults

ACCENT = (45, 115, 245)  # Palette accent
TEXT = (34, 34, 34)  # Primary text color
MUTED = (100, 100, 100)  # Secondary text color
RULE = (230, 230, 230)  # Divider color
SOFT_ACCENT_BG = (243, 248, 255)  # Highlight background
ROW_FILL = (247, 250, 255)  # Alternating table row

FONT = "Helvetica"


def _format_datetime(value: Optional[datetime]) -> str:  # Format timestamp for display
    if not value:
        return "-"
    return value.strftime("%d %b %Y, %I:%M %p").lstrip("0").replace(" 0", " ")


def _effective_width(pdf: FPDF) -> float:  # Compute effective page width
    return float(pdf.w) - float(pdf.l_margin) - float(pdf.r_margin)


def _score_text(score: float, maximum: float) -> str:
    return f"{score:g}/{maximum:g}"


class ResultsPDF(FPDF):  # PDF with custom header/footer styling
    def __init__(self, *args, header_title: str = "Interview Results", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.header_title = header_title

    @staticmethod
    def _prepare_text(text: Any) -> str:  # Core fonts only cover latin-1
        value = "" if text is None else str(text)
        value = value.replace("•", "-").replace("–", "-").replace("—", "-")
        value = value.replace("‘", "'").replace("’", "'").replace("“", '"').replace("”", '"')
        return value.encode("latin-1", "ignore").decode("latin-1")

    def cell(self, *args, **kwargs):  # Wrap base cell with text sanitisation
        args_list = list(args)
        if len(args_list) >= 3:
            args_list[2] = self._prepare_text(args_list[2])
        elif "text" in kwargs:
            kwargs["text"] = self._prepare_text(kwargs["text"])
        return super().cell(*args_list, **kwargs)

    def multi_cell(self, *args, **kwargs):  # Wrap base multi_cell with text sanitisation
        args_list = list(args)
        if len(args_list) >= 3:
            args_list[2] = self._prepare_text(args_list[2])
        elif "text" in kwargs:
            kwargs["text"] = self._prepare_text(kwargs["text"])
        return super().multi_cell(*args_list, **kwargs)

    def header(self) -> None:  # Render header banner
        usable = _effective_width(self)
        if self.page_no() == 1:
            self.set_fill_color(*ACCENT)
            self.rect(0, 0, self.w, 18, style="F")
            self.set_text_color(255, 255, 255)
            self.set_font(FONT, "B", 16)
            self.set_xy(self.l_margin, 5)
            self.cell(usable, 8, self.header_title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            self.set_text_color(*TEXT)
            self.set_y(24)
        else:
            self.set_text_color(80, 80, 80)
            self.set_xy(self.l_margin, 8)
            self.set_font(FONT, "B", 12)
            self.cell(usable, 6, self.header_title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            mark = self.get_y()
            self.set_draw_color(*ACCENT)
            self.set_line_width(0.4)
            self.line(self.l_margin, mark + 1, self.w - self.r_margin, mark + 1)
            self.set_text_color(*TEXT)
            self.ln(4)

    def footer(self) -> None:  # Render footer with pagination
        self.set_y(-12)
        self.set_draw_color(*RULE)
        self.set_line_width(0.2)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_text_color(120, 120, 120)
        self.set_font(FONT, "", 9)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="R")


def _section_title(pdf: FPDF, title: str) -> None:  # Render styled section title
    pdf.set_text_color(*TEXT)
    pdf.set_x(pdf.l_margin)
    pdf.set_font(FONT, "B", 13)
    pdf.cell(0, 9, title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_draw_color(*RULE)
    pdf.set_line_width(0.2)
    y = pdf.get_y()
    pdf.line(pdf.l_margin, y, pdf.l_margin + _effective_width(pdf), y)
    pdf.ln(2)


def _meta_block(pdf: FPDF, rows: List[Tuple[str, str]]) -> None:  # Draw two-column metadata
    col = _effective_width(pdf) / 2.0
    line = 6
    for idx in range(0, len(rows), 2):
        left = rows[idx]
        right = rows[idx + 1] if idx + 1 < len(rows) else ("", "")
        pdf.set_x(pdf.l_margin)
        pdf.set_text_color(*MUTED)
        pdf.set_font(FONT, "", 10)
        pdf.cell(col, line, left[0], new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.cell(col, line, right[0], new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_text_color(*TEXT)
        pdf.set_font(FONT, "B", 11)
        pdf.cell(col, line, left[1], new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.cell(col, line, right[1], new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)


def _paragraph(pdf: FPDF, text: str, *, muted: bool = False) -> None:
    pdf.set_x(pdf.l_margin)
    pdf.set_text_color(*(MUTED if muted else TEXT))
    pdf.set_font(FONT, "", 11)
    pdf.multi_cell(_effective_width(pdf), 6, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_text_color(*TEXT)
    pdf.ln(2)


def _bullets(pdf: FPDF, items: Sequence[str], empty: str) -> None:
    if not items:
        _paragraph(pdf, empty, muted=True)
        return
    pdf.set_text_color(*TEXT)
    pdf.set_font(FONT, "", 11)
    for item in items:
        pdf.set_x(pdf.l_margin)
        pdf.multi_cell(_effective_width(pdf), 6, f"- {item}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)


def _table(pdf: FPDF, headers: Sequence[str], ratios: Sequence[float], rows: Sequence[Sequence[str]], empty: str) -> None:
    widths = [_effective_width(pdf) * ratio for ratio in ratios]
    pdf.set_x(pdf.l_margin)
    pdf.set_fill_color(*ACCENT)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font(FONT, "B", 10)
    for width, title in zip(widths, headers):
        pdf.cell(width, 8, title, align="L", fill=True)
    pdf.ln(8)
    pdf.set_text_color(*TEXT)
    if not rows:
        _paragraph(pdf, empty, muted=True)
        return
    pdf.set_font(FONT, "", 10)
    for idx, row in enumerate(rows):
        fill = idx % 2 == 0
        if fill:
            pdf.set_fill_color(*ROW_FILL)
        pdf.set_x(pdf.l_margin)
        for width, raw in zip(widths, row):
            value = ResultsPDF._prepare_text(raw)
            text = value if pdf.get_string_width(value) <= width - 2 else _truncate(pdf, value, width - 2)
            pdf.cell(width, 7, text, border=0, fill=fill)
        pdf.ln(7)
    pdf.ln(2)


def _truncate(pdf: FPDF, value: str, width: float) -> str:
    text = value
    while text and pdf.get_string_width(text + "...") > width:
        text = text[:-1]
    return text.rstrip() + "..."


def _score_banner(pdf: FPDF, results: InterviewResults) -> None:
    overall = results.overall_score
    top = pdf.get_y()
    pdf.set_fill_color(*SOFT_ACCENT_BG)
    pdf.rect(pdf.l_margin, top, _effective_width(pdf), 18, style="F")
    pdf.set_xy(pdf.l_margin + 6, top + 3)
    pdf.set_text_color(*MUTED)
    pdf.set_font(FONT, "", 10)
    pdf.cell(_effective_width(pdf) - 12, 6, f"Overall score ({overall.band})")
    pdf.set_xy(pdf.l_margin + 6, top + 9)
    pdf.set_text_color(*ACCENT)
    pdf.set_font(FONT, "B", 14)
    headline = (
        f"{overall.percentage:.1f}%  |  Grade {overall.grade}  |  "
        f"{_score_text(overall.total_score, overall.max_possible_score)}"
    )
    pdf.cell(_effective_width(pdf) - 12, 7, headline)
    pdf.set_y(top + 22)
    pdf.set_text_color(*TEXT)


def generate_results_pdf(results: InterviewResults) -> bytes:  # Build PDF payload for completed interview results
    session = results.session
    report = results.summary
    pdf = ResultsPDF(header_title=f"{session.position} - Interview Results")
    pdf.alias_nb_pages()
    pdf.set_margins(15, 22, 15)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    _section_title(pdf, "Session Overview")
    _meta_block(
        pdf,
        [
            ("Candidate", session.candidate_name or "-"),
            ("Position", session.position),
            ("Industry", session.industry),
            ("Interview type", session.type),
            ("Difficulty", session.difficulty),
            ("Experience level", session.experience_level or "-"),
            ("Started", _format_datetime(session.start_time)),
            ("Completed", _format_datetime(session.end_time)),
        ],
    )
    _score_banner(pdf, results)

    _section_title(pdf, "Summary")
    _paragraph(pdf, report.summary)
    _paragraph(pdf, report.job_fit_analysis, muted=True)
    _paragraph(pdf, report.market_positioning, muted=True)

    _section_title(pdf, "Topic Analysis")
    _table(
        pdf,
        ["Topic", "Questions", "Average", "Performance"],
        [0.4, 0.15, 0.15, 0.3],
        [
            [topic.replace("-", " ").replace("_", " ").title(), str(stats.question_count), f"{stats.average_score_percent:.1f}%", stats.performance_label]
            for topic, stats in report.topic_analysis.items()
        ],
        "No topics were scored.",
    )

    _section_title(pdf, "Strengths")
    _bullets(pdf, report.strengths, "No recurring strengths recorded.")
    _section_title(pdf, "Areas for Improvement")
    _bullets(pdf, report.areas_for_improvement, "No recurring weaknesses recorded.")
    _section_title(pdf, "Recommendations")
    _bullets(pdf, report.recommendations, "No recommendations.")
    _section_title(pdf, "Learning Path")
    _bullets(pdf, report.learning_path, "No learning path available.")

    _section_title(pdf, "Question Breakdown")
    _table(
        pdf,
        ["#", "Question", "Topic", "Score"],
        [0.06, 0.6, 0.18, 0.16],
        [
            [str(idx + 1), question.text, question.topic or "general", _score_text(evaluation.score, evaluation.max_score)]
            for idx, (question, evaluation) in enumerate(zip(session.questions, results.evaluations))
        ],
        "No answers recorded.",
    )

    return bytes(pdf.output())


__all__ = ["generate_results_pdf"]
