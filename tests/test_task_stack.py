#!/usr/bin/env python
"""Unit tests for the task stack."""
import unittest

from taskline.core.errors import ErrorCategory, ProtocolViolation
from taskline.core.task_stack import TaskStack, TaskStatus


class TaskStackTests(unittest.TestCase):

    def setUp(self):
        self.stack = TaskStack()

    def test_starts_empty(self):
        self.assertTrue(self.stack.is_empty)
        self.assertIsNone(self.stack.top)
        self.assertEqual(len(self.stack), 0)

    def test_push_assigns_depth_and_increasing_ids(self):
        a = self.stack.push("A")
        b = self.stack.push("B")
        c = self.stack.push("C")
        self.assertEqual([a.depth, b.depth, c.depth], [0, 1, 2])
        self.assertLess(a.id, b.id)
        self.assertLess(b.id, c.id)
        self.assertIs(self.stack.top, c)
        self.assertEqual(c.status, TaskStatus.RUNNING)

    def test_lifo_resolution(self):
        tasks = [self.stack.push(f"T{i}") for i in range(4)]
        for t in reversed(tasks):
            # every other open task is rejected before the top one
            for other in self.stack:
                if other.id != t.id:
                    with self.assertRaises(ProtocolViolation):
                        self.stack.pop(other.id, TaskStatus.PASSED)
            popped = self.stack.pop(t.id, TaskStatus.PASSED)
            self.assertIs(popped, t)
            self.assertEqual(popped.status, TaskStatus.PASSED)
        self.assertTrue(self.stack.is_empty)

    def test_out_of_order_violation_details(self):
        a = self.stack.push("A")
        b = self.stack.push("B")
        with self.assertRaises(ProtocolViolation) as ctx:
            self.stack.pop(a.id, TaskStatus.FAILED)
        self.assertEqual(ctx.exception.expected_id, b.id)
        self.assertEqual(ctx.exception.actual_id, a.id)
        self.assertEqual(ctx.exception.category, ErrorCategory.PROTOCOL)
        self.assertEqual(len(self.stack), 2)

    def test_double_resolve_and_unknown_id(self):
        a = self.stack.push("A")
        self.stack.pop(a.id, TaskStatus.WARNED)
        with self.assertRaises(ProtocolViolation):
            self.stack.pop(a.id, TaskStatus.WARNED)
        self.stack.push("B")
        with self.assertRaises(ProtocolViolation):
            self.stack.pop(999, TaskStatus.PASSED)

    def test_resolve_to_running_rejected(self):
        a = self.stack.push("A")
        with self.assertRaises(ValueError):
            self.stack.pop(a.id, TaskStatus.RUNNING)
        self.assertEqual(len(self.stack), 1)

    def test_set_message_only_on_top(self):
        a = self.stack.push("A")
        b = self.stack.push("B")
        self.assertFalse(self.stack.set_message(a.id, "A2"))
        self.assertEqual(a.message, "A")
        self.assertTrue(self.stack.set_message(b.id, "B2"))
        self.assertEqual(b.message, "B2")
        self.assertEqual(len(self.stack), 2)
        self.assertEqual(b.depth, 1)

    def test_ids_not_reused_after_pop(self):
        a = self.stack.push("A")
        self.stack.pop(a.id, TaskStatus.PASSED)
        b = self.stack.push("B")
        self.assertNotEqual(a.id, b.id)
        self.assertEqual(b.depth, 0)


if __name__ == "__main__":
    unittest.main()
