import json

from reactivex.subject import Subject

from pyselectx import select, to_dict, to_immutable
from todo_selectors import get_owned_todos, get_todo_summary

if __name__ == "__main__":
    states = Subject()

    # 訂閱推導值變化
    states.pipe(select(get_todo_summary, {"owner": "amy"})).subscribe(
        on_next=lambda summary: print(
            f"摘要更新: {json.dumps(to_dict(summary), ensure_ascii=False, indent=2)}"
        )
    )

    todos = [
        {"id": 1, "title": "write docs", "done": False, "owner": "amy"},
        {"id": 2, "title": "ship release", "done": True, "owner": "bob"},
        {"id": 3, "title": "fix bug", "done": True, "owner": "amy"},
    ]

    print("\n==== 推送狀態 ====")
    states.on_next(to_immutable({"todos": todos, "filter": "all"}))
    # 內容相同的新狀態不會觸發重新計算
    states.on_next(to_immutable({"todos": todos, "filter": "all"}))
    states.on_next(to_immutable({"todos": todos, "filter": "done"}))

    print("\n==== 快取統計 ====")
    print(get_owned_todos.cache_info())
