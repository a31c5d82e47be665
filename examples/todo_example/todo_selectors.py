from pyselectx import create_selector, create_structured_selector

# 定義Selectors
get_todos = lambda state, *_: state["todos"]
get_filter = lambda state, *_: state["filter"]
get_owner = lambda state, props, *_: props["owner"] if props else None

get_visible_todos = create_selector(
    get_todos,
    get_filter,
    result_fn=lambda todos, flt: tuple(
        t for t in todos
        if flt == "all" or (flt == "done") == t["done"]
    ),
)
get_owned_todos = create_selector(
    get_visible_todos,
    get_owner,
    result_fn=lambda todos, owner: tuple(t for t in todos if owner is None or t["owner"] == owner),
)
# 把可見待辦與目前的篩選條件組成一份摘要
get_todo_summary = create_structured_selector({
    "visible": get_owned_todos,
    "filter": get_filter,
})
