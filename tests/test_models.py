import unittest
from dataclasses import FrozenInstanceError

from tests._test_path import SRC  # noqa: F401  (ensures src on path)

from alphaportrait.core.errors import (
    EmptyResultError,
    EncodingError,
    ErrorKind,
    TransportError,
    error_kind,
)
from alphaportrait.core.models import (
    IDLE_STATUS,
    NARRATION_SCHEDULE,
    EnhancementResult,
    ProcessingStatus,
    StatusStep,
)


class TestProcessingStatus(unittest.TestCase):
    def test_defaults(self):
        s = ProcessingStatus()
        self.assertIs(s.step, StatusStep.IDLE)
        self.assertEqual(s.message, "")
        self.assertEqual(s, IDLE_STATUS)

    def test_frozen(self):
        s = ProcessingStatus()
        with self.assertRaises(FrozenInstanceError):
            s.message = "x"  # type: ignore[misc]

    def test_step_values(self):
        self.assertEqual(
            [s.value for s in StatusStep],
            ["idle", "uploading", "enhancing", "completed", "error"],
        )

    def test_narration_schedule(self):
        self.assertEqual([d for d, _ in NARRATION_SCHEDULE], [2.0, 5.0])
        self.assertEqual(NARRATION_SCHEDULE[0][1].message, "Simulating Sony A1 optical path...")
        self.assertEqual(NARRATION_SCHEDULE[1][1].message, "Refining skin texture and highlights...")
        for _, status in NARRATION_SCHEDULE:
            self.assertIs(status.step, StatusStep.ENHANCING)

    def test_result_frozen(self):
        r = EnhancementResult(enhanced_encoding="a", original_encoding="b")
        with self.assertRaises(FrozenInstanceError):
            r.enhanced_encoding = "c"  # type: ignore[misc]


class TestErrorKinds(unittest.TestCase):
    def test_kind_mapping(self):
        self.assertIs(error_kind(TransportError("x")), ErrorKind.TRANSPORT)
        self.assertIs(error_kind(EmptyResultError("x")), ErrorKind.EMPTY_RESULT)
        self.assertIs(error_kind(EncodingError("x")), ErrorKind.ENCODING)

    def test_foreign_exceptions_are_transport(self):
        self.assertIs(error_kind(ConnectionError("down")), ErrorKind.TRANSPORT)
