"""NiceGUI chat interface.

Renders one session's log and typing indicator, and forwards input and
uploads to the session's controller in-process.
"""

import html
import logging
import re

from nicegui import events, ui

from quirra.conversation.controller import ConversationController, UploadValidationError
from quirra.conversation.registry import get_session_registry
from quirra.models.schemas import Message, Sender
from quirra.parsing.pdf_parser import PDF_MIME_TYPE

logger = logging.getLogger(__name__)


def markdown_to_html(text: str) -> str:
    """Convert the markdown subset Gemini commonly emits to HTML.

    Supports: code blocks, inline code, bold, italic.
    """
    text = html.escape(text, quote=False)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)

    return text.replace("\n", "<br>")


CUSTOM_CSS = """
<style>
    body { background: linear-gradient(135deg, #f3e8ff 0%, #dbeafe 100%); min-height: 100vh; }
    .message-user { background: #9333ea; color: white; border-radius: 18px 18px 4px 18px; }
    .message-bot { background: white; color: #1f2937; border-radius: 18px 18px 18px 4px; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page with its own conversation session."""
    ui.add_head_html(CUSTOM_CSS)
    registry = get_session_registry()
    session_id, controller = registry.create()

    def render_message(message: Message) -> None:
        is_user = message.sender is Sender.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-bot"
        if is_user:
            content = html.escape(message.text).replace("\n", "<br>")
        else:
            content = markdown_to_html(message.text)
        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"px-4 py-2 max-w-[70%] shadow-md {bubble}"):
                ui.html(content, sanitize=False).classes("text-sm leading-relaxed")

    @ui.refreshable
    def messages_view(current: ConversationController) -> None:
        for message in current.messages:
            render_message(message)
        if current.pending:
            with ui.row().classes("w-full justify-start"):
                ui.label("Typing...").classes(
                    "px-4 py-2 message-bot text-sm shadow-md animate-pulse"
                )

    async def send_message() -> None:
        current = controller
        task = current.submit(input_field.value)
        if task is None:
            return
        input_field.value = ""
        messages_view.refresh(controller)
        await current.await_turn(task)
        messages_view.refresh(controller)
        scroll_area.scroll_to(percent=1.0)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        try:
            await controller.upload_document(e.file.name, e.file.content_type, data)
        except UploadValidationError as err:
            logger.info(f"Rejected upload {e.file.name}: {err}")
            ui.notify(str(err), type="negative")
            return
        finally:
            upload.reset()
        messages_view.refresh(controller)

    async def new_chat() -> None:
        nonlocal session_id, controller
        await registry.close(session_id)
        session_id, controller = registry.create()
        messages_view.refresh(controller)

    async def on_delete() -> None:
        await registry.close(session_id)

    ui.context.client.on_delete(on_delete)

    # === UI Layout ===
    with ui.column().classes("w-full max-w-2xl mx-auto items-center p-4"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("🤖Quirra").classes("text-4xl font-bold text-purple-800")
            ui.button(icon="add", on_click=new_chat).props("flat round color=purple")

        with ui.card().classes("w-full").style("height: 80vh"):
            with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
                with ui.column().classes("w-full gap-4 p-2"):
                    messages_view(controller)

            with ui.row().classes("w-full items-center gap-2 border-t pt-3"):
                input_field = (
                    ui.input(placeholder="Type your message...")
                    .props("borderless dense")
                    .classes("flex-grow")
                    .on("keydown.enter", send_message)
                )
                upload = (
                    ui.upload(on_upload=handle_upload, auto_upload=True)
                    .props(f'accept="{PDF_MIME_TYPE}" flat dense')
                    .classes("w-40")
                )
                ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=purple"
                )
