"""
Transition Service - Moves an issue through its workflow.
"""

from __future__ import annotations

import logging

from ..adapters.jira.client import JiraApiClient
from ..adapters.jira.normalizer import EntityNormalizer
from ..core.constants import ExpectedStatus
from ..core.domain.entities import Transition
from ..core.exceptions import InvalidQuery, RejectedByServer


class TransitionService:
    """Lists and applies workflow transitions of an issue."""

    def __init__(self, client: JiraApiClient, normalizer: EntityNormalizer | None = None):
        self.client = client
        self.normalizer = normalizer or EntityNormalizer()
        self.logger = logging.getLogger("TransitionService")

    def available(self, issue_id: str) -> list[Transition]:
        """Transitions currently available for the issue, in server order."""
        payload = self.client.get(f"issue/{issue_id}/transitions")
        return self.normalizer.transitions(payload)

    def apply(self, issue_id: str, transition: str) -> Transition:
        """
        Apply a transition by id, name or target status name.

        Names are matched case-insensitively against the transitions the
        issue currently offers.

        Args:
            issue_id: Issue id or key
            transition: Transition id, transition name, or target status

        Returns:
            The transition that was applied

        Raises:
            InvalidQuery: If no available transition matches
            RejectedByServer: Unless the tracker answers 204
        """
        chosen = self._match(issue_id, transition)

        response = self.client.post(
            f"issue/{issue_id}/transitions",
            json={"transition": {"id": chosen.id}},
        )
        if response.status_code != ExpectedStatus.TRANSITION_ISSUE:
            raise RejectedByServer(
                f"Transitioning {issue_id} via '{chosen.name}'",
                expected=ExpectedStatus.TRANSITION_ISSUE,
                actual=response.status_code,
                issue_key=issue_id,
                body=response.text,
            )

        self.logger.info(f"Transitioned {issue_id} via '{chosen.name}' to '{chosen.to_status}'")
        return chosen

    def _match(self, issue_id: str, transition: str) -> Transition:
        wanted = transition.strip()
        if not wanted:
            raise InvalidQuery("Transition must not be empty", issue_key=issue_id)

        options = self.available(issue_id)
        lowered = wanted.lower()
        for candidate in options:
            if candidate.id == wanted:
                return candidate
        for candidate in options:
            if lowered in (candidate.name.lower(), candidate.to_status.lower()):
                return candidate

        names = ", ".join(f"'{t.name}'" for t in options) or "none"
        raise InvalidQuery(
            f"No transition '{wanted}' available for {issue_id} (available: {names})",
            issue_key=issue_id,
        )
