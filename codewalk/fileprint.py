"""Print a source file with a range of lines highlighted.

The highlighted region is preceded by a few lines of context: a *mark* is placed up to four line boundaries before the
highlight so that a viewer scrolled to the mark sees where the highlight sits.  Output is either an HTML fragment (for
embedding in a page) or plain terminal text.
"""

import html

from codewalk.formatting import Colors
from codewalk.lines import byte_offset_of_line, line_of
from codewalk.snippet import DEFAULT_CONTEXT_LINES, context_start, expand_to_lines
from codewalk.stepper import Range

HIGHLIGHT_CLASS = "codewalkhighlight"
STYLESHEET = "/doc/codewalk/codewalk.css"


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class FilePrint:
    """A buffer together with the byte range to highlight and the context mark before it.

    Args:
        data: File contents
        highlight: Whole-line byte range to highlight; may be empty
        mark: Offset where the leading context starts
    """

    def __init__(self, data: bytes, highlight: Range, mark: int):
        self.data = data
        self.highlight = highlight
        self.mark = mark

    @classmethod
    def from_lines(cls, data: bytes, lo_line: int, hi_line: int, context: int = DEFAULT_CONTEXT_LINES) -> "FilePrint":
        """Highlight lines *lo_line* through *hi_line* (1-based, inclusive).

        A *hi_line* below *lo_line* is raised to *lo_line*; line numbers past the end of the file clamp to its end.
        Passing ``0`` for both highlights nothing.
        """
        hi_line = max(hi_line, lo_line)
        lo = byte_offset_of_line(data, lo_line)
        hi = byte_offset_of_line(data, hi_line + 1)
        return cls(data, Range(lo, hi), context_start(data, lo, context))

    @classmethod
    def from_range(cls, data: bytes, span: Range, context: int = DEFAULT_CONTEXT_LINES) -> "FilePrint":
        """Highlight the whole lines touched by the byte range *span*."""
        highlight = expand_to_lines(data, span)
        return cls(data, highlight, context_start(data, highlight.lo, context))

    def render_html(self) -> str:
        """Return the file as an escaped ``<pre>`` block with the mark anchor and highlight ``<div>``.

        Bytes that are not valid UTF-8 are shown as U+FFFD, so the fragment is for display only and does not round-trip
        to the original file contents.
        """
        lo, hi = self.highlight
        parts = [
            f'<style type="text/css">@import "{STYLESHEET}";</style><pre>',
            html.escape(_decode(self.data[: self.mark])),
            "<a name='mark'></a>",
            html.escape(_decode(self.data[self.mark : lo])),
        ]
        if lo < hi:
            parts.append(f"<div class='{HIGHLIGHT_CLASS}'>")
            parts.append(html.escape(_decode(self.data[lo:hi])))
            parts.append("</div>")
        parts.append(html.escape(_decode(self.data[hi:])))
        parts.append("</pre>")
        return "".join(parts)

    def render_text(self, colors: Colors | None = None, full: bool = False) -> str:
        """Return numbered terminal lines, highlighted lines marked with ``>`` and shown in reverse video.

        Args:
            colors: Color codes to use; detected from stdout when omitted
            full: Show the whole file instead of the context window through the end of the highlight
        """
        colors = colors or Colors()
        lo, hi = self.highlight
        start, end = (0, len(self.data)) if full else (self.mark, hi)

        output = []
        number = line_of(self.data, start)
        offset = start
        while offset < end:
            newline = self.data.find(b"\n", offset, end)
            stop = end if newline < 0 else newline + 1
            text = _decode(self.data[offset:stop]).rstrip("\r\n")
            if lo <= offset < hi:
                output.append(f"{colors.BLUE}{number:>6}{colors.RESET} > {colors.REVERSE}{text}{colors.RESET}")
            else:
                output.append(f"{colors.BLUE}{number:>6}{colors.RESET}   {text}")
            offset = stop
            number += 1
        return "\n".join(output)
