EMPTY_LIST = "No todos found. Add one!"
LIST_HEADER = "<b>Todos</b>"

ASK_TEXT = "What needs to be done? (one message)"
ASK_PRIORITY = "Priority?"
ASK_DUE_DATE = "Due date? Send YYYY-MM-DD or YYYY-MM-DD HH:MM, or skip."
ASK_NEW_TEXT = "Send the new text (one message)."
ASK_DELETE_CONFIRM = "Are you sure you want to delete this todo?"

ADDED = "Todo added successfully"
UPDATED = "Todo updated successfully"
DELETED = "Todo deleted successfully"
CANCELLED = "Cancelled."
EDIT_ABORTED = "Edit interrupted."
STALE_BUTTON = "This button is no longer valid."

FAILED_ADD = "Failed to add todo"
FAILED_UPDATE = "Failed to update todo"
FAILED_DELETE = "Failed to delete todo"
