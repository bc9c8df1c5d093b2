# core/formatters.py

# all pure text helpers
# must never import from models!

PLACEHOLDER = "--"

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


# === grade formatters ===


def format_percentage(percentage: float | None) -> str:
    return f"{percentage:.2f}%" if percentage is not None else PLACEHOLDER


def format_letter_grade(letter: str | None) -> str:
    return letter if letter is not None else PLACEHOLDER


def format_points(points: float | None) -> str:
    if points is None:
        return PLACEHOLDER

    return f"{points:g}"


def format_weighting_status(is_weighted: bool) -> str:
    return "[WEIGHTED]" if is_weighted else "[UNWEIGHTED]"
