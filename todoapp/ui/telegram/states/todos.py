from aiogram.fsm.state import StatesGroup, State


class TodosFlow(StatesGroup):
    # add flow
    add_text = State()
    add_priority = State()
    add_due_date = State()

    # edit flow
    edit_text = State()
