"""Reduces a GitHub event list into the statistics fed to the digest prompt.

Only bounded aggregates leave this module: the top five event types and
repositories by count, plus commit, pull request and issue counters.  The
prompt never sees raw event payloads.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

TOP_N = 5

DIGEST_PROMPT_TEMPLATE = (
    "Analyze this GitHub activity for user '{username}' over the past {period}:\n\n"
    "{summary}\n"
    "Create a concise, insightful digest that:\n"
    "1. Highlights the most significant activities and patterns\n"
    "2. Identifies the repositories that received the most attention\n"
    "3. Summarizes the types of work done (commits, PRs, issues, etc.)\n"
    "4. Notes any interesting trends or observations\n"
    "5. Keep it under 300 words and use emojis to make it engaging\n\n"
    "Format the response as a readable summary with bullet points where appropriate."
)


@dataclass
class ActivityStats:
    total_events: int = 0
    event_types: Counter[str] = field(default_factory=Counter)
    repos: Counter[str] = field(default_factory=Counter)
    commit_count: int = 0
    pull_request_count: int = 0
    issue_count: int = 0

    def top_event_types(self, n: int = TOP_N) -> list[tuple[str, int]]:
        return self.event_types.most_common(n)

    def top_repos(self, n: int = TOP_N) -> list[tuple[str, int]]:
        return self.repos.most_common(n)


def reduce_events(events: Any) -> ActivityStats:
    """Count event types, repositories and work items in *events*.

    ``Counter.most_common`` is stable over first-seen order, which gives
    the tie-breaking the histograms need.
    """
    if not isinstance(events, list):
        raise ValueError(f"Expected a list of events, got {type(events).__name__}")

    stats = ActivityStats(total_events=len(events))
    for event in events:
        event_type = event.get("type") or "Unknown"
        stats.event_types[event_type] += 1

        repo = event.get("repo")
        if repo is not None:
            stats.repos[repo.get("name") or "Unknown"] += 1

        if event_type == "PushEvent":
            commits = (event.get("payload") or {}).get("commits")
            if commits:
                stats.commit_count += len(commits)
        elif event_type == "PullRequestEvent":
            stats.pull_request_count += 1
        elif event_type == "IssuesEvent":
            stats.issue_count += 1

    return stats


def render_activity_summary(stats: ActivityStats) -> str:
    lines = [f"Total Events: {stats.total_events}", "", "Event Types:"]
    lines += [f"  - {name}: {count}" for name, count in stats.top_event_types()]
    lines += ["", "Top Repositories:"]
    lines += [f"  - {name}: {count} events" for name, count in stats.top_repos()]
    lines += [
        "",
        "Activity Breakdown:",
        f"  - Commits: {stats.commit_count}",
        f"  - Pull Requests: {stats.pull_request_count}",
        f"  - Issues: {stats.issue_count}",
    ]
    return "\n".join(lines) + "\n"


def build_digest_prompt(username: str, period: str, summary: str) -> str:
    return DIGEST_PROMPT_TEMPLATE.format(username=username, period=period, summary=summary)
