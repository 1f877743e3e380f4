#!/usr/bin/env python3
"""
终端里与对话助理交互（单会话）：每轮打印意图、筛选增量与回复。
用法: python scripts/chat_repl.py
输入 /reset 清空历史，/quit 退出。需配置 .env 中的 API Key，否则每轮返回固定致歉文案。
"""
import asyncio


async def repl():
    from jobdesk.assistant import DialogueOrchestrator

    assistant = DialogueOrchestrator()
    print("jobdesk 助理（/reset 清空历史，/quit 退出）\n")
    while True:
        try:
            message = input("you> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not message:
            continue
        if message == "/quit":
            break
        if message == "/reset":
            assistant.clear_history()
            print("(历史已清空)\n")
            continue
        result = await assistant.chat(message)
        print(f"[{result.intent.value}] filters={result.filters or '{}'}")
        print(f"assistant> {result.response}\n")


def main():
    asyncio.run(repl())


if __name__ == "__main__":
    main()
