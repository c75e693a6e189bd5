"""Chat service — streams LLM replies, running the get_route tool when the model asks for it.

OpenAI is the primary provider; Anthropic is the fallback when OpenAI is not
configured or fails before any text has been streamed.
"""

import json
import logging
from collections.abc import AsyncIterator

import anthropic
from openai import AsyncOpenAI

from tripchat.config import Settings, settings
from tripchat.services.route_tool import (
    TOOL_NAME,
    anthropic_tool_spec,
    openai_tool_spec,
    run_get_route,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a friendly travel-planning assistant.

When the user wants to get from one place to another, call the get_route tool with the
origin, the destination and, if they mentioned one, the travel mode (driving, walking or
cycling). Relay the tool's answer faithfully: keep its numbered lists, links and figures.
Do not invent distances, durations, hotels or attractions the tool did not return.

If the origin or destination is missing or ambiguous, ask a short clarifying question
instead of calling the tool. For anything unrelated to travel, answer briefly."""

CHAT_ROLES = {"user", "assistant"}


class ChatService:
    """Streams a reply to a chat history with bounded tool-calling rounds."""

    def __init__(self, config: Settings):
        self._config = config
        self._openai = None
        self._anthropic = None

        if config.openai_api_key:
            self._openai = AsyncOpenAI(api_key=config.openai_api_key)
        if config.anthropic_api_key:
            self._anthropic = anthropic.AsyncAnthropic(api_key=config.anthropic_api_key)

    async def stream_reply(self, messages: list[dict]) -> AsyncIterator[str]:
        """Yield reply text chunks for a user/assistant message history.

        Raises:
            RuntimeError if no provider could produce a reply.
        """
        history = [
            {"role": m["role"], "content": m["content"]}
            for m in messages
            if m.get("role") in CHAT_ROLES and m.get("content")
        ]
        errors = []

        if self._openai:
            streamed = False
            try:
                async for text in self._stream_openai(history):
                    streamed = True
                    yield text
                return
            except Exception as e:
                if streamed:
                    logger.error(f"OpenAI stream broke mid-reply: {e}")
                    raise
                errors.append(f"OpenAI: {e}")
                logger.warning(f"OpenAI failed, trying Anthropic: {e}")

        if self._anthropic:
            try:
                async for text in self._stream_anthropic(history):
                    yield text
                return
            except Exception as e:
                errors.append(f"Anthropic: {e}")
                logger.warning(f"Anthropic also failed: {e}")

        if not errors:
            errors.append("no LLM provider configured")
        raise RuntimeError(f"All LLM providers failed: {'; '.join(errors)}")

    async def _run_tool(self, name: str, arguments) -> str:
        if name != TOOL_NAME:
            logger.warning(f"Model requested unknown tool {name!r}")
            return f"Unknown tool: {name}"
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments or "{}")
            except json.JSONDecodeError:
                logger.warning(f"Unparseable {name} arguments: {arguments!r}")
                return "The tool arguments were not valid JSON."
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            logger.warning(f"{name} arguments are not a JSON object: {arguments!r}")
            return "The tool arguments were not valid JSON."
        return await run_get_route(arguments)

    async def _stream_openai(self, history: list[dict]) -> AsyncIterator[str]:
        chat_messages = [{"role": "system", "content": SYSTEM_PROMPT}] + history
        tools = [openai_tool_spec(self._config.travel_mode_list)]
        max_steps = self._config.llm_max_steps

        for step in range(max_steps):
            kwargs: dict = {
                "model": self._config.openai_model,
                "messages": chat_messages,
                "tools": tools,
                "stream": True,
            }
            if step == max_steps - 1:
                kwargs["tool_choice"] = "none"

            stream = await self._openai.chat.completions.create(**kwargs)

            content_parts = []
            tool_calls: dict[int, dict] = {}
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                if delta.content:
                    content_parts.append(delta.content)
                    yield delta.content
                for tc in delta.tool_calls or []:
                    slot = tool_calls.setdefault(tc.index, {"id": "", "name": "", "arguments": ""})
                    if tc.id:
                        slot["id"] = tc.id
                    if tc.function and tc.function.name:
                        slot["name"] = tc.function.name
                    if tc.function and tc.function.arguments:
                        slot["arguments"] += tc.function.arguments

            if not tool_calls:
                return

            ordered = [tool_calls[i] for i in sorted(tool_calls)]
            chat_messages.append({
                "role": "assistant",
                "content": "".join(content_parts) or None,
                "tool_calls": [
                    {
                        "id": call["id"],
                        "type": "function",
                        "function": {"name": call["name"], "arguments": call["arguments"]},
                    }
                    for call in ordered
                ],
            })
            for call in ordered:
                output = await self._run_tool(call["name"], call["arguments"])
                chat_messages.append({"role": "tool", "tool_call_id": call["id"], "content": output})

    async def _stream_anthropic(self, history: list[dict]) -> AsyncIterator[str]:
        convo = list(history)
        tools = [anthropic_tool_spec(self._config.travel_mode_list)]
        max_steps = self._config.llm_max_steps

        for step in range(max_steps):
            kwargs: dict = {
                "model": self._config.anthropic_model,
                "max_tokens": 2000,
                "system": SYSTEM_PROMPT,
                "messages": convo,
                "tools": tools,
            }
            if step == max_steps - 1:
                kwargs["tool_choice"] = {"type": "none"}

            response = await self._anthropic.messages.create(**kwargs)

            assistant_blocks = []
            tool_uses = []
            for block in response.content:
                if block.type == "text":
                    assistant_blocks.append({"type": "text", "text": block.text})
                    if block.text:
                        yield block.text
                elif block.type == "tool_use":
                    assistant_blocks.append({
                        "type": "tool_use", "id": block.id, "name": block.name, "input": block.input,
                    })
                    tool_uses.append(block)

            if response.stop_reason != "tool_use" or not tool_uses:
                return

            convo.append({"role": "assistant", "content": assistant_blocks})
            results = []
            for block in tool_uses:
                output = await self._run_tool(block.name, block.input)
                results.append({"type": "tool_result", "tool_use_id": block.id, "content": output})
            convo.append({"role": "user", "content": results})


# Singleton
chat_service = ChatService(settings)
