"""Tests for the Gradio front end: config loading and event handlers.

Handlers are called directly with a zero delay; the Blocks app is built but
never launched.
"""

import gradio as gr
import pytest
from pydantic import ValidationError

import textshift_app as app

NO_DELAY = app.AppConfig(delay_seconds=0)

ENV_NAMES = [
    "TEXTSHIFT_DELAY_SECONDS",
    "TEXTSHIFT_DEFAULT_SHIFT",
    "TEXTSHIFT_SERVER_NAME",
    "TEXTSHIFT_SERVER_PORT",
    "TEXTSHIFT_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAppConfig:
    """TEXTSHIFT_* environment variables feed AppConfig."""

    def test_defaults(self, clean_env):
        cfg = app.AppConfig()
        assert cfg.delay_seconds == 0.5
        assert cfg.default_shift == 3
        assert cfg.server_name is None
        assert cfg.server_port is None
        assert cfg.log_level == "INFO"

    def test_reads_prefixed_variables(self, clean_env):
        clean_env.setenv("TEXTSHIFT_DELAY_SECONDS", "0")
        clean_env.setenv("TEXTSHIFT_DEFAULT_SHIFT", "-4")
        clean_env.setenv("TEXTSHIFT_SERVER_NAME", "0.0.0.0")
        clean_env.setenv("TEXTSHIFT_SERVER_PORT", "7861")
        clean_env.setenv("TEXTSHIFT_LOG_LEVEL", "debug")
        clean_env.setenv("DELAY_SECONDS", "99")

        cfg = app.AppConfig()
        assert cfg.delay_seconds == 0.0
        assert cfg.default_shift == -4
        assert cfg.server_name == "0.0.0.0"
        assert cfg.server_port == 7861
        assert cfg.log_level == "DEBUG"

    def test_blank_values_fall_back_to_defaults(self, clean_env):
        clean_env.setenv("TEXTSHIFT_SERVER_PORT", "")
        clean_env.setenv("TEXTSHIFT_SERVER_NAME", "")
        cfg = app.AppConfig()
        assert cfg.server_port is None
        assert cfg.server_name is None

    @pytest.mark.parametrize(
        ("name", "value", "field"),
        [
            ("TEXTSHIFT_DELAY_SECONDS", "soon", "delay_seconds"),
            ("TEXTSHIFT_DELAY_SECONDS", "-1", "delay_seconds"),
            ("TEXTSHIFT_SERVER_PORT", "80.5", "server_port"),
            ("TEXTSHIFT_SERVER_PORT", "70000", "server_port"),
            ("TEXTSHIFT_DEFAULT_SHIFT", "x", "default_shift"),
        ],
    )
    def test_invalid_values_name_the_field(self, clean_env, name, value, field):
        clean_env.setenv(name, value)
        with pytest.raises(ValidationError, match=field):
            app.AppConfig()

    def test_negative_delay_rejected_as_argument(self, clean_env):
        with pytest.raises(ValidationError, match="delay_seconds"):
            app.AppConfig(delay_seconds=-1)

    def test_config_is_frozen(self, clean_env):
        cfg = app.AppConfig()
        with pytest.raises(ValidationError):
            cfg.delay_seconds = 2


class TestHandlers:
    """do_encrypt / do_decrypt return (output, status) pairs."""

    def test_encrypt_success(self):
        assert app.do_encrypt("base64", "Hello", 3, NO_DELAY) == ("SGVsbG8=", "Encrypted (base64).")

    def test_decrypt_success(self):
        assert app.do_decrypt("base64", "SGVsbG8=", 3, NO_DELAY) == ("Hello", "Decrypted (base64).")

    def test_caesar_with_number_field_value(self):
        out, status = app.do_encrypt("caesar", "abc", 3.0, NO_DELAY)
        assert out == "def"
        assert status == "Encrypted (caesar)."

    def test_caesar_with_cleared_shift_field(self):
        assert app.do_encrypt("caesar", "abc", None, NO_DELAY) == (
            "",
            "Error: Invalid shift value for Caesar cipher.",
        )

    def test_empty_input_reports_error(self):
        assert app.do_encrypt("rot13", "", 3, NO_DELAY) == ("", "Error: Please provide text to encrypt.")

    def test_decode_error_reports_error(self):
        out, status = app.do_decrypt("base64", "not-valid-base64!!", 3, NO_DELAY)
        assert out == ""
        assert status == "Error: Invalid Base64 input."

    def test_surrogate_result_reported_instead_of_sent(self):
        # "a" + (0xD800 - 0x61) lands on a lone surrogate, which cannot be sent as UTF-8
        out, status = app.do_encrypt("caesar", "a", str(0xD800 - 0x61), NO_DELAY)
        assert out == ""
        assert status == app.UNDISPLAYABLE
        assert status.startswith("Error: ")

    def test_surrogate_free_large_shift_still_displayed(self):
        out, status = app.do_encrypt("caesar", "a", str(0xE000 - 0x61), NO_DELAY)
        assert out == "\ue000"
        assert status == "Encrypted (caesar)."

    def test_swap(self):
        assert app.do_swap("in", "out") == ("out", "in", "Moved output to input.")

    def test_delay_applied_before_processing(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr(app.time, "sleep", sleeps.append)
        app.do_encrypt("rot13", "abc", None, app.AppConfig(delay_seconds=0.5))
        app.do_decrypt("rot13", "abc", None, NO_DELAY)
        assert sleeps == [0.5]

    def test_delay_does_not_change_output(self, monkeypatch):
        monkeypatch.setattr(app.time, "sleep", lambda _s: None)
        slow = app.do_encrypt("rot13", "Attack at dawn", None, app.AppConfig(delay_seconds=2))
        fast = app.do_encrypt("rot13", "Attack at dawn", None, NO_DELAY)
        assert slow == fast == ("Nggnpx ng qnja", "Encrypted (rot13).")

    @pytest.mark.parametrize(("algorithm", "visible"), [("caesar", True), ("base64", False), ("rot13", False)])
    def test_shift_field_visibility(self, algorithm, visible):
        update = app.on_algorithm_change(algorithm)
        assert update["visible"] is visible


class TestBuildApp:
    def test_builds_blocks(self):
        demo = app.build_app(NO_DELAY)
        assert isinstance(demo, gr.Blocks)

    def test_output_has_copy_and_clear_controls(self):
        demo = app.build_app(NO_DELAY)
        outputs = [b for b in demo.blocks.values() if isinstance(b, gr.Textbox) and b.label == "Output"]
        assert len(outputs) == 1
        assert outputs[0].show_copy_button is True
        assert any(isinstance(b, gr.ClearButton) for b in demo.blocks.values())

    def test_main_launches_with_config(self, clean_env):
        launched = {}

        class FakeApp:
            def launch(self, **kwargs):
                launched.update(kwargs)

        clean_env.setenv("TEXTSHIFT_SERVER_PORT", "7861")
        clean_env.setenv("TEXTSHIFT_LOG_LEVEL", "warning")
        clean_env.setattr(app, "build_app", lambda config: FakeApp())
        app.main()
        assert launched == {"server_name": None, "server_port": 7861}
