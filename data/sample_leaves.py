"""
Sample leave sheet for local development.
In production, rows live in the Google Sheet.
"""

from leave_sheet_bot.models import SHEET_HEADER

SAMPLE_ROWS = [
    list(SHEET_HEADER),
    [
        "LID-1738999057",
        "08/02/2025, 12:47:37",
        "Aditya Mishra",
        "",
        "20/02/2025",
        "21/02/2025",
        "Family function",
        "1",
        "",
        "",
        "Approved",
        "Enjoy the break",
    ],
    [
        "LID-1739014881",
        "08/02/2025, 17:11:21",
        "Priya Sharma",
        "",
        "14/03/2025",
        "14/03/2025",
        "Exam Leave",
        "1",
        "",
        "",
        "Rejected",
        "Release week",
    ],
    [
        "LID-1792000000",
        "16/10/2026, 09:46:40",
        "John Doe",
        "",
        "20/11/2027",
        "25/11/2027",
        "Vacation",
        "3",
        "",
        "",
        "",
        "",
    ],
]
