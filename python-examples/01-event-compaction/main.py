"""
Demonstrate event compaction on a running conversation.

Every three turns the older part of the conversation is folded into a
summary event. The original events stay in the log; the model context only
sees the summaries plus the recent turns.

Run:
    python main.py

Set OPENAI_API_KEY (and optionally SESSIONFOLD_SUMMARIZER_MODEL) to summarize
with a language model instead of the local keyword summarizer.
"""

import asyncio
import logging

from dotenv import load_dotenv
from sessionfold import (
    Content,
    Event,
    EventsCompactionConfig,
    InMemorySessionService,
    LLMRegistry,
    build_context_messages,
    get_session_summaries,
)

from hooks import log_compaction, skip_tiny_windows
from summarizers import keyword_summary, openai_provider_from_env

load_dotenv()

CONVERSATION = [
    ("user", "Hi! I'm planning a trip to Lisbon in May with my partner."),
    ("assistant", "Lovely choice. How many days will you stay?"),
    ("user", "Five days. We love seafood and we don't want to rent a car."),
    ("assistant", "Then stay in Baixa or Alfama; trams and the metro cover the rest."),
    ("user", "Great. Budget is about 150 euros per night for the hotel."),
    ("assistant", "Noted: 5 nights, central Lisbon, up to 150 EUR per night."),
    ("user", "Can you suggest a day trip too?"),
    ("assistant", "Sintra is 40 minutes by train from Rossio station."),
    ("user", "Perfect, add Sintra on day three."),
    ("assistant", "Done. Day three is Sintra."),
]


def build_service() -> InMemorySessionService:
    provider = openai_provider_from_env()
    if provider is not None:
        registry = LLMRegistry({r".*": provider})
        compaction = EventsCompactionConfig.from_env(
            compaction_interval=3,
            overlap_size=1,
        )
        if compaction.model is None:
            compaction = compaction.model_copy(update={"model": "gpt-4o-mini"})
        print(f"Summarizing with model {compaction.model}")
        return InMemorySessionService(
            registry=registry,
            default_compaction=compaction,
            before_compaction=[log_compaction, skip_tiny_windows],
        )

    print("OPENAI_API_KEY not set, summarizing with the local keyword summarizer")
    return InMemorySessionService(
        default_compaction=EventsCompactionConfig(
            compaction_interval=3, overlap_size=1, summarizer=keyword_summary
        ),
        before_compaction=[log_compaction, skip_tiny_windows],
    )


async def main():
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    service = build_service()
    session = service.create_session("trip-planner", "user-1")

    print("=" * 60)
    print("Event Compaction Demo")
    print("=" * 60)

    for author, text in CONVERSATION:
        role = "user" if author == "user" else "model"
        event = Event(author=author, content=Content.from_text(text, role=role))
        result = await service.append_event(session, event)
        print(f"[{result.event.index}] {author}: {text}")
        if result.compaction_error is not None:
            print(f"  compaction failed: {result.compaction_error}")
        elif result.compacted:
            record = result.compaction.event.actions.compaction
            print(f"  -> summary of {record.start_index}-{record.end_index}: "
                  f"{record.compacted_content.text}")

    print()
    print("-" * 60)
    print(f"Stored events: {len(session.events)}")
    messages = build_context_messages(session.events)
    print(f"Messages sent to the model: {len(messages)}")
    for message in messages:
        print(f"  {message['role']}: {message['content']}")

    print()
    print("-" * 60)
    print("Session summaries:")
    for summary in await get_session_summaries(session.events, fallback=keyword_summary):
        print(f"  - {summary.summary}")


if __name__ == "__main__":
    asyncio.run(main())
