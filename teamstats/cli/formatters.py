# Output formatters for team listings

import json

from teamstats.schemas import TeamData


def format_text(teams: list[TeamData], verbose: bool = False) -> str:
    """
    Format teams as a numbered plain-text list.

    Returns - Formatted text string
    """
    if not teams:
        return "No teams found.\n"

    output = []
    for i, team in enumerate(teams, 1):
        output.append(f"{i}. {team.name} ({team.wins}-{team.losses}-{team.ties})")
        if verbose:
            output.append(f"   ID: {team.id}")
    output.append("")

    return "\n".join(output)


def format_table(teams: list[TeamData]) -> str:
    """
    Format teams as a fixed-width table.

    Returns - Table string
    """
    if not teams:
        return "No teams found.\n"

    name_width = max(len("Name"), *(len(t.name) for t in teams))
    header = f"{'ID':>4}  {'Name':<{name_width}}  {'W':>3}  {'L':>3}  {'T':>3}"
    lines = [header, "-" * len(header)]
    for team in teams:
        lines.append(
            f"{team.id:>4}  {team.name:<{name_width}}  {team.wins:>3}  {team.losses:>3}  {team.ties:>3}"
        )
    lines.append("")
    return "\n".join(lines)


def format_json(teams: list[TeamData], **extra) -> str:
    """
    Format teams as JSON, with optional top-level fields.

    Returns - JSON string
    """
    payload = {"teams": [team.model_dump() for team in teams], **extra}
    return json.dumps(payload, indent=2, default=str)


def format_output(teams: list[TeamData], format_type: str = "table", **kwargs) -> str:
    """
    Format teams in the specified format.

    Args:
        teams - List of teams
        format_type - Output format: "text", "table" or "json"
        **kwargs - Extra JSON fields, or verbose for text

    Returns - Formatted output string
    """
    if format_type == "json":
        return format_json(teams, **kwargs)
    if format_type == "text":
        return format_text(teams, verbose=kwargs.get("verbose", False))
    if format_type == "table":
        return format_table(teams)
    raise ValueError(f"Unsupported format: {format_type}")
