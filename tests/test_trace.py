"""
Tests for the RunTrace.
"""
import unittest
import json
from sententia.trace import RunTrace

class TestRunTrace(unittest.TestCase):

    def test_trace_initialization(self):
        """Tests that the trace is initialized correctly."""
        trace = RunTrace("bulk", "puella ambulat")
        self.assertEqual(trace.mode, "bulk")
        self.assertEqual(trace.sentence, "puella ambulat")
        self.assertIsNotNone(trace.trace_id)
        self.assertIsNotNone(trace.start_time)
        self.assertIsNone(trace.end_time)
        self.assertIsNone(trace.span)
        self.assertEqual(trace.steps, [])
        self.assertEqual(trace.rounds, 0)
        self.assertIsNone(trace.error)

    def test_span_recorded(self):
        """Tests that a restricted run records its span as [start, stop]."""
        trace = RunTrace("range", "puella ambulat", span=range(1, 2))
        self.assertEqual(trace.span, [1, 2])

    def test_add_step(self):
        """Tests adding a step to the trace."""
        trace = RunTrace("bulk", "s")
        trace.add_step("genitive", 3, [0, 1], description="A test step.")
        self.assertEqual(len(trace.steps), 1)
        step = trace.steps[0]
        self.assertEqual(step["step_id"], 1)
        self.assertEqual(step["name"], "genitive")
        self.assertEqual(step["tier"], 3)
        self.assertEqual(step["changed"], [0, 1])
        self.assertEqual(step["description"], "A test step.")
        self.assertIsNotNone(step["timestamp"])

    def test_changed_words(self):
        """Tests that changed words are collected across steps."""
        trace = RunTrace("bulk", "s")
        trace.add_step("sole-reading", 1, [2, 0])
        trace.add_step("genitive", 3, [])
        trace.add_step("adjacent", 4, [0, 3])
        self.assertEqual(trace.changed_words, [0, 2, 3])

    def test_finish(self):
        """Tests concluding the trace."""
        trace = RunTrace("bulk", "s")
        trace.finish(2)
        self.assertEqual(trace.rounds, 2)
        self.assertIsNotNone(trace.end_time)
        self.assertIsNone(trace.error)

    def test_set_error(self):
        """Tests setting an error."""
        trace = RunTrace("bulk", "s")
        error_msg = "Something went wrong."
        trace.set_error(error_msg)
        self.assertEqual(trace.error, error_msg)
        self.assertIsNotNone(trace.end_time)

    def test_to_json(self):
        """Tests serialization to JSON."""
        trace = RunTrace("incremental", "puella ambulat", span=range(0, 2))
        trace.add_step("sole-reading", 1, [0])
        trace.finish(1)

        json_output = trace.to_json()
        self.assertIsInstance(json_output, str)

        data = json.loads(json_output)
        self.assertEqual(data['trace_id'], trace.trace_id)
        self.assertEqual(data['sentence'], trace.sentence)
        self.assertEqual(data['span'], [0, 2])
        self.assertEqual(len(data['steps']), 1)
        self.assertEqual(data['rounds'], 1)

if __name__ == '__main__':
    unittest.main()
