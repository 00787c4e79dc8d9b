"""
Gradio front end for the transform relay.

Run with: python -m ui.photo_editor (from the backend directory)
"""
import mimetypes
from pathlib import Path
from typing import List, Optional, Tuple

import gradio as gr

from config.settings import settings
from core.logger import logger
from models.image_transform import Transformation
from services.transformations import list_transformations
from ui.relay_client import RelayClient, RelayError
from ui.session import EditorSession, EditorSessionError


def load_filters(client: RelayClient) -> List[Transformation]:
    """Ask the relay for its transformations, falling back to the built-in table."""
    try:
        filters = client.list_transformations()
    except RelayError as e:
        logger.warning(f"{e.message}; using built-in transformations")
        return list_transformations()
    return filters or list_transformations()


def load_image(image_path: Optional[str], session: EditorSession) -> Tuple[EditorSession, None]:
    """Capture a webcam snapshot or uploaded file into the session."""
    if not image_path:
        session.reset()
        return session, None

    path = Path(image_path)
    mime_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    try:
        session.capture(path.read_bytes(), mime_type, path.name)
    except EditorSessionError as e:
        logger.warning(f"Ignoring new image: {e}")
    return session, None


def apply_filter(
    effect: str,
    session: EditorSession,
    client: Optional[RelayClient] = None
) -> Tuple[EditorSession, Optional[str]]:
    """Run one transform; failures are logged and leave the previous result in place."""
    try:
        session.begin_transform(effect)
    except EditorSessionError as e:
        logger.warning(f"Cannot apply {effect}: {e}")
        return session, session.result_url

    client = client or RelayClient()
    logger.info(f"Sending file: name={session.filename}, type={session.mime_type}, size={len(session.image_bytes)}")
    url = None
    try:
        url = client.transform(session.image_bytes, session.filename, session.mime_type, effect)
    except RelayError as e:
        logger.error(f"Error applying filter {effect}: {e.message}")
    finally:
        # the session never stays in transforming, whatever the client raised
        if url is None:
            session.fail_transform()

    if url is None:
        return session, session.result_url

    session.finish_transform(url)
    return session, url


def reset(session: EditorSession) -> Tuple[EditorSession, None, None]:
    session.reset()
    return session, None, None


def _set_filters_interactive(count: int, interactive: bool):
    updates = [gr.update(interactive=interactive) for _ in range(count)]
    return updates[0] if count == 1 else updates


def _filter_handler(effect: str, client: RelayClient):
    def handler(session: EditorSession):
        return apply_filter(effect, session, client)
    return handler


def build_interface(client: Optional[RelayClient] = None) -> gr.Blocks:
    client = client or RelayClient()
    filters = load_filters(client)

    with gr.Blocks(title="Photo AI Editor") as demo:
        gr.Markdown("# Photo AI Editor")
        session_state = gr.State(EditorSession())

        with gr.Row():
            image_input = gr.Image(
                sources=["webcam", "upload"],
                type="filepath",
                format="jpeg",
                label="Take or Upload Photo",
            )
            result_image = gr.Image(label="Transformed Image", interactive=False)

        with gr.Row():
            filter_buttons = [gr.Button(f.name, variant="primary") for f in filters]
        reset_button = gr.Button("Reset")

        image_input.change(
            fn=load_image,
            inputs=[image_input, session_state],
            outputs=[session_state, result_image],
        )

        for transformation, button in zip(filters, filter_buttons):
            button.click(
                fn=lambda: _set_filters_interactive(len(filter_buttons), False),
                outputs=filter_buttons,
            ).then(
                fn=_filter_handler(transformation.effect, client),
                inputs=[session_state],
                outputs=[session_state, result_image],
            ).then(
                fn=lambda: _set_filters_interactive(len(filter_buttons), True),
                outputs=filter_buttons,
            )

        reset_button.click(
            fn=reset,
            inputs=[session_state],
            outputs=[session_state, image_input, result_image],
        )

    return demo


def main():
    demo = build_interface()
    demo.launch(server_port=settings.UI_PORT, share=False)


if __name__ == "__main__":
    main()
