# textshift_app.py
# TextShift — Gradio UI (Base64 / ROT13 / Caesar)

from __future__ import annotations

import logging
import time
from typing import Optional

import gradio as gr
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

import textshift as ts

log = logging.getLogger(__name__)


CSS = """
<style>
#title { margin-bottom: 0.25rem; }
#status { min-height: 1.5rem; font-size: 0.92rem; }
.lede { opacity: 0.85; font-size: 0.9rem; }
</style>
"""

ABOUT_MD = r"""
## About TextShift

Three classical, reversible text transforms:

- **base64**: the text's UTF-8 bytes in standard Base64 (with `=` padding).
  Decoding tolerates whitespace, missing padding and the URL-safe alphabet,
  but rejects anything that is not Base64 or does not decode to valid UTF-8.

- **rot13**: every Latin letter (`A`–`Z`, `a`–`z`) moves 13 places within its case.
  Digits, punctuation and non-Latin scripts are untouched. Encrypt and decrypt are the same operation.

- **caesar**: every character's **code point** is shifted by the given amount (not wrapped
  inside the alphabet, so `z` + 1 is `{`). Large shifts may produce non-printable characters,
  but decrypting with the same shift always restores the original text.

**None of these provide any security.** They are obfuscation, not encryption.
"""

UNDISPLAYABLE = (
    "Error: The shift produced characters that cannot be displayed "
    "(lone surrogate code points). Try a different shift."
)


# ============================================================
# Config (TEXTSHIFT_* environment variables)
# ============================================================

class AppConfig(BaseSettings):
    """UI settings, read from ``TEXTSHIFT_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TEXTSHIFT_",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
        frozen=True,
    )

    delay_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Artificial processing delay before each transform (seconds).",
    )
    default_shift: int = Field(
        default=3,
        description="Initial value of the Caesar shift field.",
    )
    server_name: Optional[str] = Field(
        default=None,
        description="Host to bind; None keeps the Gradio default.",
    )
    server_port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="Port to bind; None keeps the Gradio default.",
    )
    log_level: str = Field(
        default="INFO",
        description="Level handed to logging.basicConfig.",
    )

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


# ============================================================
# Handlers
# ============================================================

def _simulate_work(config: AppConfig) -> None:
    # UX only: output is identical with or without the pause
    if config.delay_seconds > 0:
        time.sleep(config.delay_seconds)


def _displayable(text: str) -> bool:
    # The browser round-trip is UTF-8; lone surrogates cannot make it.
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _render(r: ts.TransformResult, done: str):
    if not r.ok:
        return "", f"Error: {r.error}"
    if not _displayable(r.result):
        log.debug("textshift_app: result holds surrogates, not sending it to the browser")
        return "", UNDISPLAYABLE
    return r.result, done


def do_encrypt(algorithm: str, text_in: str, shift, config: Optional[AppConfig] = None):
    config = config or AppConfig()
    _simulate_work(config)

    r = ts.encrypt(ts.TransformRequest(text=text_in, algorithm=algorithm, shift=shift))
    return _render(r, f"Encrypted ({algorithm}).")


def do_decrypt(algorithm: str, text_in: str, shift, config: Optional[AppConfig] = None):
    config = config or AppConfig()
    _simulate_work(config)

    r = ts.decrypt(ts.TransformRequest(text=text_in, algorithm=algorithm, shift=shift))
    return _render(r, f"Decrypted ({algorithm}).")


def do_swap(text_in: str, text_out: str):
    # Output becomes the next input, so a result can be decrypted straight back.
    return text_out, text_in, "Moved output to input."


def on_algorithm_change(algorithm: str):
    return gr.update(visible=(algorithm == "caesar"))


# ============================================================
# UI
# ============================================================

def build_app(config: Optional[AppConfig] = None):
    config = config or AppConfig()

    def _encrypt(algorithm, text_in, shift):
        return do_encrypt(algorithm, text_in, shift, config)

    def _decrypt(algorithm, text_in, shift):
        return do_decrypt(algorithm, text_in, shift, config)

    with gr.Blocks(title="TextShift") as demo:
        gr.HTML(CSS)

        gr.Markdown("# TextShift", elem_id="title")
        gr.Markdown(
            "Encrypt or decrypt text with **Base64**, **ROT13** or a **Caesar** code-point shift. "
            "These are reversible encodings, not real encryption.",
            elem_classes=["lede"],
        )

        with gr.Tabs():
            with gr.TabItem("Demo"):
                with gr.Row():
                    algorithm = gr.Dropdown(
                        choices=list(ts.ALGORITHMS),
                        value="base64",
                        label="Algorithm",
                    )
                    shift = gr.Number(
                        value=config.default_shift,
                        precision=0,
                        label="Shift (Caesar)",
                        visible=False,
                    )

                text_in = gr.Textbox(
                    label="Input (plaintext or encoded)",
                    lines=4,
                    value="Attack at dawn",
                )

                with gr.Row():
                    btn_enc = gr.Button("Encrypt", variant="primary")
                    btn_dec = gr.Button("Decrypt")
                    btn_swap = gr.Button("Use output as input ↑")
                    btn_clear = gr.ClearButton(value="Clear")

                text_out = gr.Textbox(label="Output", lines=4, show_copy_button=True)
                status = gr.Markdown(
                    "Tip: Encrypt and Decrypt both read from Input and write to Output.",
                    elem_id="status",
                )
                btn_clear.add([text_in, text_out])

                algorithm.change(on_algorithm_change, inputs=[algorithm], outputs=[shift])
                btn_enc.click(
                    _encrypt,
                    inputs=[algorithm, text_in, shift],
                    outputs=[text_out, status],
                )
                btn_dec.click(
                    _decrypt,
                    inputs=[algorithm, text_in, shift],
                    outputs=[text_out, status],
                )
                btn_swap.click(
                    do_swap,
                    inputs=[text_in, text_out],
                    outputs=[text_in, text_out, status],
                )

            with gr.TabItem("About"):
                gr.Markdown(ABOUT_MD)

    return demo


def main() -> None:
    config = AppConfig()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info("Starting TextShift UI (delay=%.2fs)", config.delay_seconds)
    app = build_app(config)
    app.launch(server_name=config.server_name, server_port=config.server_port)


if __name__ == "__main__":
    main()
