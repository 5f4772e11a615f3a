"""Tests for the question service."""

from chat_commands.services import QuestionService


async def test_find_lists_open_questions_in_order(dispatcher, questions: QuestionService, make_message):
    await dispatcher.dispatch(make_message("!ask one"))
    await dispatcher.dispatch(make_message("plain chat"))
    second = await dispatcher.dispatch(make_message("!idea two"))
    third = await dispatcher.dispatch(make_message("!submit three"))

    await questions.remove(second.storage_id)

    open_questions = await questions.find()

    assert [q.num for q in open_questions] == [1, 3]
    assert open_questions[1].storage_id == third.storage_id


async def test_archive_marks_resolved(dispatcher, questions, make_message):
    question = await dispatcher.dispatch(make_message("!ask resolve me"))

    archived = await questions.archive(question.storage_id)

    assert archived.archived is True
    assert await questions.find() == []


async def test_archive_deleted_question_returns_none(dispatcher, questions, make_message):
    question = await dispatcher.dispatch(make_message("!ask gone"))
    await questions.remove(question.storage_id)

    assert await questions.archive(question.storage_id) is None


async def test_remove_returns_storage_id(questions):
    assert await questions.remove("abc") == "abc"
