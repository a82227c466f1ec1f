"""Tests for the ``cutout serve`` command."""

from unittest.mock import patch

from cutout.cli.main import app


class TestServe:
    def test_runs_app_factory_with_options(self):
        command, bound, _ = app.parse_args(["serve", "--host", "127.0.0.1", "--port", "9000"])

        with patch("cutout.cli.main.uvicorn.run") as run:
            command(*bound.args, **bound.kwargs)

        run.assert_called_once_with(
            "cutout.application.rest.app:create_app",
            factory=True,
            host="127.0.0.1",
            port=9000,
            reload=False,
        )
