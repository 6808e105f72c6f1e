"""
Command-line entry point.

Feeds a conversation (one scammer message per line) through the engine,
accumulating intelligence for one session, and prints the session record,
risk assessment and agent notes as JSON.

    python -m scamintel conversation.txt --session demo-1
    cat messages.txt | python -m scamintel -
"""

import argparse
import json
import logging
import sys
import uuid

from scamintel import config
from scamintel.core.intelligence import IntelligenceEngine, empty_intel
from scamintel.core.reporting import build_agent_notes, engagement_score, has_critical_intel
from scamintel.session_store import SessionStore

logger = logging.getLogger("scamintel")


def read_messages(source: str) -> list:
    if source == "-":
        lines = sys.stdin.read().splitlines()
    else:
        with open(source, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip()]


def analyze_conversation(engine: IntelligenceEngine, store: SessionStore, session_id: str,
                         messages: list, per_message: bool = False) -> dict:
    """
    Ingest every message into the session and build the report.

    Args:
        engine: Intelligence engine
        store: Session store holding the accumulated record
        session_id: Conversation identifier
        messages: Scammer messages in arrival order
        per_message: Include each message's own record and risk

    Returns:
        JSON-ready report dict
    """
    turns = []
    for text in messages:
        record = engine.extract(text)
        if per_message:
            turns.append({
                "text": text,
                "intelligence": record.model_dump(mode="json"),
                "risk": engine.score(record).model_dump(mode="json"),
            })
        engine.ingest_record(store, session_id, record)

    # Counts earlier runs too when the store is file-backed
    total_messages = store.add_messages(session_id, len(messages))

    session = store.get(session_id)
    if session is None:
        session = empty_intel()
    report = {
        "sessionId": session_id,
        "totalMessages": total_messages,
        "newMessages": len(messages),
        "extractedIntelligence": session.model_dump(mode="json"),
        "risk": engine.score(session).model_dump(mode="json"),
        "hasCriticalIntel": has_critical_intel(session),
        "engagementScore": engagement_score(session, total_messages),
        "agentNotes": build_agent_notes(session, total_messages),
    }
    if per_message:
        report["turns"] = turns
    return report


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="scamintel", description="Extract scam intelligence from a conversation")
    parser.add_argument("conversation", help="File with one scammer message per line, or '-' for stdin")
    parser.add_argument("--session", default=None, help="Session id (default: random)")
    parser.add_argument("--per-message", action="store_true", help="Also report each message on its own")
    parser.add_argument("--store", default=config.SESSION_FILE, help="JSON session file (default: in memory)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    try:
        messages = read_messages(args.conversation)
    except OSError as e:
        logger.error(f"Cannot read conversation: {e}")
        return 1

    session_id = args.session or str(uuid.uuid4())
    report = analyze_conversation(IntelligenceEngine(), SessionStore(args.store), session_id,
                                  messages, per_message=args.per_message)
    print(json.dumps(report, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
