import unittest

from rules.rules import DEFAULT_MAX_NODES

try:
    from api import app
except ModuleNotFoundError:
    app = None

try:
    from fastapi.testclient import TestClient
except (ImportError, RuntimeError):
    TestClient = None


@unittest.skipIf(app is None or TestClient is None, "fastapi stack is not available in this environment")
class TestApiIntegration(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)

    def test_health_endpoint(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_solve_endpoint_returns_board_and_grid_format(self) -> None:
        response = self.client.post("/solve", json={"size": 5})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["solved"])
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["start_row"], 2)
        self.assertEqual(body["start_col"], 2)
        self.assertEqual(body["grid_rows"], ["", "", " 1 ", "", ""])
        self.assertEqual(body["grid_text"], "\n\n 1 \n\n")
        self.assertEqual(len(body["board"]), 5)

    def test_solve_endpoint_reports_no_result_as_status(self) -> None:
        response = self.client.post("/solve", json={"size": 6, "start_row": 3, "start_col": 2})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["solved"])
        self.assertEqual(body["grid_rows"], [])
        self.assertEqual(body["grid_text"], "no result")
        self.assertEqual(body["board"][3][2], 1)

    def test_solve_endpoint_honours_node_budget(self) -> None:
        response = self.client.post(
            "/solve",
            json={"size": 12, "start_row": 5, "start_col": 5, "max_nodes": 3},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["solved"])
        self.assertTrue(body["budget_exhausted"])

    def test_solve_endpoint_applies_default_budget(self) -> None:
        response = self.client.post("/solve", json={"size": 11, "start_row": 2, "start_col": 3})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["solved"])
        self.assertTrue(body["budget_exhausted"])
        self.assertEqual(body["nodes_visited"], DEFAULT_MAX_NODES + 1)

    def test_solve_endpoint_with_trace_includes_trace(self) -> None:
        response = self.client.post(
            "/solve",
            json={"size": 12, "start_row": 5, "start_col": 5, "max_nodes": 20, "trace": True},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIn("trace", body)
        self.assertTrue(any("Place move" in line for line in body["trace"]))

    def test_solve_endpoint_with_trace_steps_includes_walkthrough_frames(self) -> None:
        response = self.client.post(
            "/solve",
            json={
                "size": 12,
                "start_row": 5,
                "start_col": 5,
                "max_nodes": 20,
                "trace_steps": True,
                "trace_max_steps": 10,
            },
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(len(body["trace_steps"]), 10)
        self.assertTrue(body["trace_truncated"])
        first_step = body["trace_steps"][0]
        self.assertEqual(first_step["event"], "expand")
        self.assertIn("message", first_step)
        self.assertEqual(len(first_step["grid"]), 12)
        self.assertIsNone(body["trace"])

    def test_solve_endpoint_returns_400_on_blocked_start(self) -> None:
        response = self.client.post("/solve", json={"size": 12, "start_row": 0, "start_col": 5})

        self.assertEqual(response.status_code, 400)
        self.assertIn("detail", response.json())

    def test_solve_endpoint_returns_400_on_half_start(self) -> None:
        response = self.client.post("/solve", json={"size": 12, "start_row": 5})
        self.assertEqual(response.status_code, 400)

    def test_solve_endpoint_rejects_too_small_board(self) -> None:
        response = self.client.post("/solve", json={"size": 4})
        self.assertEqual(response.status_code, 422)

    def test_validate_endpoint_accepts_tour(self) -> None:
        board = [
            [1, 4, 7, 10],
            [12, 9, 2, 5],
            [3, 6, 11, 8],
            [-1, -1, -1, -1],
        ]
        response = self.client.post("/validate", json={"board": board})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["valid"])

    def test_validate_endpoint_rejects_incomplete_board(self) -> None:
        board = [
            [1, 4, 7, 10],
            [12, 9, 2, 5],
            [3, 6, 0, 8],
            [-1, -1, -1, -1],
        ]
        response = self.client.post("/validate", json={"board": board})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["valid"])
        self.assertIn("never visited", body["message"])


if __name__ == "__main__":
    unittest.main()
