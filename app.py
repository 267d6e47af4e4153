import logging

import gradio as gr

from json_find_replace.handlers import (
    apply_handler,
    export_handler,
    load_document_handler,
    load_document_text_handler,
    load_schema_handler,
    preview_handler,
)
from json_find_replace.settings import log_level_from_env

logging.basicConfig(
    level=log_level_from_env(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- UI Definition ---
with gr.Blocks(title="JSON Find & Replace") as demo:
    gr.Markdown("# JSON Find & Replace")
    gr.Markdown(
        "Load a JSON document and, optionally, the schema that describes it. "
        "Fields marked `x_editor_disabled` or `x_editor_hidden`, and `$ref` keys, are never changed."
    )

    # State
    document_state = gr.State()
    schema_state = gr.State()

    with gr.Row():
        # Left Panel: Inputs
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            document_file = gr.File(label="Document (JSON)", file_types=[".json"])
            schema_file = gr.File(label="Schema (JSON, optional)", file_types=[".json"])
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Protect Fields")
            disabled_selector = gr.Dropdown(
                label="Fields to leave untouched",
                choices=[],
                value=[],
                multiselect=True,
                interactive=False,
                info="Marks the selected fields as disabled for this run.",
            )

            gr.Markdown("### 3. Find & Replace")
            search_box = gr.Textbox(label="Find")
            replacement_box = gr.Textbox(label="Replace with")
            match_whole = gr.Checkbox(label="Match whole field", value=False)
            with gr.Row():
                preview_btn = gr.Button("Preview")
                apply_btn = gr.Button("Replace All", variant="primary")

        # Right Panel: Document & Diff
        with gr.Column(scale=1):
            gr.Markdown("### 4. Document")
            document_text = gr.Code(label="Document", language="json", interactive=True)
            reload_btn = gr.Button("Use Edited Document")

            gr.Markdown("### 5. Changes")
            diff_view = gr.HTML()
            diff_json = gr.JSON(label="Diff")

            gr.Markdown("### 6. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="replaced")
            export_btn = gr.Button("Export Document")
            download_output = gr.File(label="Download Result")

    document_file.upload(
        fn=load_document_handler,
        inputs=[document_file, schema_state, disabled_selector],
        outputs=[document_state, document_text, disabled_selector, status_msg],
    )

    schema_file.change(
        fn=load_schema_handler,
        inputs=[schema_file, document_state, disabled_selector],
        outputs=[schema_state, disabled_selector, status_msg],
    )

    reload_btn.click(
        fn=load_document_text_handler,
        inputs=[document_text, schema_state, disabled_selector],
        outputs=[document_state, disabled_selector, status_msg],
    )

    preview_btn.click(
        fn=preview_handler,
        inputs=[document_state, schema_state, disabled_selector, search_box, replacement_box, match_whole],
        outputs=[diff_view, diff_json, status_msg],
    )

    apply_btn.click(
        fn=apply_handler,
        inputs=[document_state, schema_state, disabled_selector, search_box, replacement_box, match_whole],
        outputs=[document_state, document_text, diff_view, status_msg],
    )

    export_btn.click(
        fn=export_handler,
        inputs=[document_state, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
