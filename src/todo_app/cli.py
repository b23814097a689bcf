#!/usr/bin/env python3
"""
Todoクライアント CLI

Usage:
    python -m src.todo_app login --email EMAIL --password PASSWORD
    python -m src.todo_app register --email EMAIL --password PASSWORD --name NAME
    python -m src.todo_app logout
    python -m src.todo_app list [--format json|text]
    python -m src.todo_app add --title "タイトル" [--description "詳細"] [--format json|text]
    python -m src.todo_app delete --id ID [--format json|text]
    python -m src.todo_app whoami
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import List, Optional

from src.session import SessionStore
from src.todo_client import TodoApiClient

from .auth_page import AuthPage
from .config import AppConfig, load_config
from .logger import setup_logger
from .navigation import LOGIN_ROUTE, TODOS_ROUTE, Navigator
from .todo_list import TodoListController


@dataclass
class AppContext:
    """1回のCLI実行で共有するオブジェクト"""

    config: AppConfig
    client: TodoApiClient
    store: SessionStore
    navigator: Navigator


def build_context(config: AppConfig, initial_route: str) -> AppContext:
    """クライアントを生成し、保存済みセッションがあれば適用する"""
    store = SessionStore(config.session_path)
    client = TodoApiClient(
        config.api_url,
        timeout=config.timeout_seconds,
        send_bearer_token=config.send_bearer_token,
    )
    session = store.load()
    if session is not None:
        client.use_session(session)
    return AppContext(config=config, client=client, store=store, navigator=Navigator(initial_route))


def print_todos(controller: TodoListController, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps([todo.model_dump() for todo in controller.todos], ensure_ascii=False))
    else:
        print(controller.render())


def open_todo_page(ctx: AppContext) -> Optional[TodoListController]:
    """Todo一覧ページを開く（一覧を読み込む）

    Returns:
        TodoListController、ログインページへ戻された場合はNone
    """
    controller = TodoListController(
        ctx.client,
        ctx.navigator,
        ctx.store,
        refetch_after_mutation=ctx.config.refetch_after_mutation,
    )
    controller.load_todos()
    if ctx.navigator.current == LOGIN_ROUTE:
        print(f"Error: {controller.error}。ログインし直してください。", file=sys.stderr)
        return None
    return controller


def cmd_login(ctx: AppContext, email: str, password: str) -> int:
    """ログイン"""
    page = AuthPage(ctx.client, ctx.navigator, ctx.store)
    page.email = email
    page.password = password
    if not page.submit():
        print(page.render(), file=sys.stderr)
        return 1
    session = ctx.store.load()
    name = session.user.name if session else email
    print(f"ログインしました: {name}")
    return 0


def cmd_register(ctx: AppContext, email: str, password: str, name: str) -> int:
    """ユーザー登録（ログインは別途必要）"""
    page = AuthPage(ctx.client, ctx.navigator, ctx.store)
    page.toggle_mode()
    page.email = email
    page.password = password
    page.name = name
    ok = page.submit()
    print(page.render(), file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


def cmd_logout(ctx: AppContext) -> int:
    """ログアウト"""
    controller = TodoListController(ctx.client, ctx.navigator, ctx.store)
    if not controller.logout():
        print(f"Error: {controller.error}", file=sys.stderr)
        return 1
    print("ログアウトしました。")
    return 0


def cmd_list(ctx: AppContext, output_format: str) -> int:
    """Todo一覧を表示"""
    controller = open_todo_page(ctx)
    if controller is None:
        return 1
    print_todos(controller, output_format)
    return 1 if controller.error else 0


def cmd_add(ctx: AppContext, title: str, description: str, output_format: str) -> int:
    """Todoを追加"""
    if not title.strip():
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1

    controller = open_todo_page(ctx)
    if controller is None:
        return 1

    controller.open_add_form()
    controller.title = title
    controller.description = description
    if not controller.add_todo():
        if ctx.navigator.current == LOGIN_ROUTE:
            print(f"Error: {controller.error}。ログインし直してください。", file=sys.stderr)
        else:
            print(f"Error: {controller.error}", file=sys.stderr)
        return 1
    print_todos(controller, output_format)
    return 0


def cmd_delete(ctx: AppContext, todo_id: str, output_format: str) -> int:
    """Todoを削除"""
    controller = open_todo_page(ctx)
    if controller is None:
        return 1

    view = next((v for v in controller.item_views() if v.todo.id == todo_id), None)
    if view is None:
        print(f"Error: ID {todo_id} のTODOが見つかりません。", file=sys.stderr)
        return 1

    view.request_delete()
    if controller.error:
        if ctx.navigator.current == LOGIN_ROUTE:
            print(f"Error: {controller.error}。ログインし直してください。", file=sys.stderr)
        else:
            print(f"Error: {controller.error}", file=sys.stderr)
        return 1
    print_todos(controller, output_format)
    return 0


def cmd_whoami(ctx: AppContext) -> int:
    """保存済みセッションのユーザーを表示"""
    session = ctx.store.load()
    if session is None:
        print("ログインしていません。", file=sys.stderr)
        return 1
    print(f"{session.user.name} <{session.user.email}> (id: {session.user.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Todoクライアント - REST APIバックエンドのTODOを操作するCLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, help="設定ファイルのパス（デフォルト: config/app_config.yaml）")
    parser.add_argument("--api-url", type=str, help="APIのベースURL（設定ファイルより優先）")
    parser.add_argument("--session-path", type=str, help="セッション保存ファイルのパス")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="ログレベル（設定ファイルより優先）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    parser_login = subparsers.add_parser("login", help="ログイン")
    parser_login.add_argument("--email", required=True, help="メールアドレス")
    parser_login.add_argument("--password", required=True, help="パスワード")

    parser_register = subparsers.add_parser("register", help="ユーザー登録")
    parser_register.add_argument("--email", required=True, help="メールアドレス")
    parser_register.add_argument("--password", required=True, help="パスワード")
    parser_register.add_argument("--name", required=True, help="氏名")

    subparsers.add_parser("logout", help="ログアウト")
    subparsers.add_parser("whoami", help="ログイン中のユーザーを表示")

    for name, help_text in (("list", "TODOリストを表示"), ("add", "新しいTODOを追加"), ("delete", "TODOを削除")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--format",
            choices=["json", "text"],
            default="text",
            help="出力フォーマット（デフォルト: text）",
        )
        if name == "add":
            sub.add_argument("--title", required=True, help="TODOのタイトル")
            sub.add_argument("--description", default="", help="TODOの詳細説明")
        elif name == "delete":
            sub.add_argument("--id", required=True, help="削除するTODOのID")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.api_url:
        config.api_url = args.api_url
    if args.session_path:
        config.session_path = args.session_path
    if args.log_level:
        config.log_level = args.log_level
    setup_logger(log_level=config.log_level, log_file=config.log_file)

    auth_commands = ("login", "register", "whoami")
    ctx = build_context(config, LOGIN_ROUTE if args.command in auth_commands else TODOS_ROUTE)

    if args.command == "login":
        return cmd_login(ctx, args.email, args.password)
    elif args.command == "register":
        return cmd_register(ctx, args.email, args.password, args.name)
    elif args.command == "logout":
        return cmd_logout(ctx)
    elif args.command == "list":
        return cmd_list(ctx, args.format)
    elif args.command == "add":
        return cmd_add(ctx, args.title, args.description, args.format)
    elif args.command == "delete":
        return cmd_delete(ctx, args.id, args.format)
    elif args.command == "whoami":
        return cmd_whoami(ctx)
    else:
        print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
