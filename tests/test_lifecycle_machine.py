from __future__ import annotations

import itertools
import unittest

from interview_prep.core.lifecycle_machine import (
    ALL_STATUSES,
    COMPLETED,
    IN_PROGRESS,
    PENDING,
    REVIEWED,
    STATUS_GRAPH,
    TRANSITIONS,
    can_transition,
    is_finished,
    next_status,
    status_rank,
    transition_for,
)


class LifecycleMachineDiagramTests(unittest.TestCase):
    def test_graph_covers_all_known_statuses(self) -> None:
        self.assertSetEqual(set(STATUS_GRAPH.keys()), set(ALL_STATUSES))

    def test_reviewed_has_no_outgoing_edges(self) -> None:
        self.assertEqual(STATUS_GRAPH[REVIEWED], frozenset())
        for operation in TRANSITIONS:
            self.assertIsNone(next_status(operation, REVIEWED), msg=operation)

    def test_every_edge_moves_exactly_one_step_forward(self) -> None:
        for source, targets in STATUS_GRAPH.items():
            for target in targets:
                self.assertEqual(status_rank(target), status_rank(source) + 1)

    def test_no_backward_or_skipping_transition_is_allowed(self) -> None:
        for source, target in itertools.product(ALL_STATUSES, repeat=2):
            expected = status_rank(target) == status_rank(source) + 1
            self.assertEqual(can_transition(source, target), expected, msg=f"{source} -> {target}")

    def test_operations_map_onto_graph_edges(self) -> None:
        for operation, (source, target) in TRANSITIONS.items():
            self.assertTrue(can_transition(source, target), msg=operation)
        self.assertEqual(transition_for("start"), (PENDING, IN_PROGRESS))
        self.assertEqual(transition_for("submit"), (IN_PROGRESS, COMPLETED))
        self.assertEqual(transition_for("review"), (COMPLETED, REVIEWED))

    def test_next_status_only_from_the_operation_source(self) -> None:
        self.assertEqual(next_status("start", PENDING), IN_PROGRESS)
        self.assertEqual(next_status("submit", IN_PROGRESS), COMPLETED)
        self.assertEqual(next_status("review", COMPLETED), REVIEWED)
        self.assertIsNone(next_status("start", IN_PROGRESS))
        self.assertIsNone(next_status("submit", PENDING))
        self.assertIsNone(next_status("review", IN_PROGRESS))

    def test_unknown_operation_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            transition_for("reopen")

    def test_unknown_status_has_no_rank(self) -> None:
        with self.assertRaises(ValueError):
            status_rank("archived")
        self.assertFalse(can_transition("archived", PENDING))

    def test_finished_statuses(self) -> None:
        self.assertFalse(is_finished(PENDING))
        self.assertFalse(is_finished(IN_PROGRESS))
        self.assertTrue(is_finished(COMPLETED))
        self.assertTrue(is_finished(REVIEWED))


if __name__ == "__main__":
    unittest.main()
