from flashdeck.domain.events import ChangeKind
from flashdeck.domain.flashcard.collection import CardCollection
from flashdeck.domain.flashcard.form import CreationForm


class TestCreationForm:

    def test_initial_state(self):
        form = CreationForm(CardCollection())

        assert form.state() == {"visible": False, "question": "", "answer": ""}

    def test_submit_resets_draft(self):
        form = CreationForm(CardCollection())

        form.update_draft_question("Q1")
        form.update_draft_answer("A1")
        form.submit()

        assert form.question == ""
        assert form.answer == ""
        assert form.visible is False

    def test_open_then_submit_adds_card(self):
        collection = CardCollection()
        form = CreationForm(collection)

        form.open()
        assert form.visible is True

        form.update_draft_question("Capital of France?")
        form.update_draft_answer("Paris")
        card_id = form.submit()

        assert len(collection) == 1
        card = collection.get(card_id)
        assert (card.question, card.answer) == ("Capital of France?", "Paris")
        assert form.state() == {"visible": False, "question": "", "answer": ""}

    def test_empty_submit_adds_blank_card(self):
        collection = CardCollection()
        form = CreationForm(collection)

        card_id = form.submit()

        card = collection.get(card_id)
        assert card.question == ""
        assert card.answer == ""

    def test_each_input_event_replaces_buffer(self):
        form = CreationForm(CardCollection())

        for text in ["C", "Ca", "Cap"]:
            form.update_draft_question(text)

        assert form.question == "Cap"

    def test_dismiss_keeps_draft_for_next_open(self):
        form = CreationForm(CardCollection())
        form.open()
        form.update_draft_question("half typed")

        form.dismiss()
        assert form.visible is False
        assert form.question == "half typed"

        form.open()
        assert form.question == "half typed"

    def test_notifications(self, recorder):
        form = CreationForm(CardCollection())
        form.subscribe(recorder)

        form.open()
        form.update_draft_question("q")
        form.update_draft_answer("a")
        form.submit()
        form.dismiss()

        kinds = [call.args[0].kind for call in recorder.call_args_list]
        assert kinds == [
            ChangeKind.FORM_OPENED,
            ChangeKind.DRAFT_UPDATED,
            ChangeKind.DRAFT_UPDATED,
            ChangeKind.FORM_SUBMITTED,
            ChangeKind.FORM_DISMISSED,
        ]
        assert recorder.call_args_list[1].args[0].payload == {"field": "question", "text": "q"}
