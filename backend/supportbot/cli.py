import argparse
import asyncio
import os
from typing import Any

from supportbot.client.api import SupportBotClient
from supportbot.client.conversation import Conversation
from supportbot.client.poller import DocumentListPoller
from supportbot.client.session import CredentialSession
from supportbot.config import settings
from supportbot.errors import SupportBotError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="supportbot", description="Support chatbot client")
    parser.add_argument("--backend-url", default=settings.backend_url)
    parser.add_argument("--api-key", default=os.getenv("SUPPORTBOT_API_KEY"))
    parser.add_argument("--project-id", default=os.getenv("SUPPORTBOT_PROJECT_ID"))
    parser.add_argument("--organization-id", default=os.getenv("SUPPORTBOT_ORGANIZATION_ID"))
    parser.add_argument("--index-id", default=os.getenv("SUPPORTBOT_INDEX_ID"))

    sub = parser.add_subparsers(dest="command", required=True)

    chat = sub.add_parser("chat", help="Ask questions")
    chat.add_argument("--message", "-m", help="Ask a single question and exit")

    sub.add_parser("init", help="Create or look up the knowledge-base pipeline")

    docs = sub.add_parser("documents", help="Manage knowledge-base documents")
    docs_sub = docs.add_subparsers(dest="action", required=True)
    docs_sub.add_parser("list")
    delete = docs_sub.add_parser("delete")
    delete.add_argument("document_id")
    upload = docs_sub.add_parser("upload")
    upload.add_argument("paths", nargs="+")
    upload.add_argument("--friendly-name")
    upload.add_argument("--category")
    watch = docs_sub.add_parser("watch")
    watch.add_argument("--interval", type=float, default=settings.document_poll_interval)
    return parser


def _print_documents(documents: list[dict[str, Any]]) -> None:
    if not documents:
        print("No documents uploaded yet.")
        return
    for doc in documents:
        title = doc.get("friendlyName") or doc.get("fileName")
        line = f"{doc.get('id')}  {title}  ({doc.get('uploadDate')})"
        if doc.get("category"):
            line += f"  [{doc['category']}]"
        print(line)


def _print_answer(message) -> None:
    print(message.content)
    for source in message.sources or []:
        print(f"  - {source.get('title')}: {source.get('excerpt')}")


async def _chat(client: SupportBotClient, single: str | None) -> None:
    conversation = Conversation()
    if single:
        _print_answer(await client.chat(single, conversation))
        return
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            return
        line = line.strip()
        if not line:
            continue
        if line in {"/quit", "/exit"}:
            return
        if line == "/clear":
            conversation.clear()
            continue
        try:
            _print_answer(await client.chat(line, conversation))
        except SupportBotError as exc:
            print(f"Error: {exc.message}")


async def _watch(client: SupportBotClient, interval: float) -> None:
    def show(documents: list[dict[str, Any]]) -> None:
        print("---")
        _print_documents(documents)

    async with DocumentListPoller(client.list_documents, show, interval=interval):
        await asyncio.Event().wait()


async def run(args: argparse.Namespace) -> None:
    session = CredentialSession()
    session.login(args.api_key or "", args.project_id or "", args.organization_id or "", args.index_id or "")

    async with SupportBotClient(session, base_url=args.backend_url) as client:
        try:
            if args.command == "init":
                print(await client.initialize())
            elif args.command == "chat":
                await _chat(client, args.message)
            elif args.action == "list":
                _print_documents(await client.list_documents())
            elif args.action == "delete":
                await client.delete_document(args.document_id)
                print("Document deleted successfully")
            elif args.action == "upload":
                uploaded = await client.upload(args.paths, args.friendly_name, args.category)
                print(f"Uploaded {len(uploaded)} file(s).")
            elif args.action == "watch":
                await _watch(client, args.interval)
        finally:
            session.clear()


def main() -> None:
    args = _build_parser().parse_args()
    try:
        asyncio.run(run(args))
    except SupportBotError as exc:
        raise SystemExit(f"Error ({exc.status_code}): {exc.message}")
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
