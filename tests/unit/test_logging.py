"""Log scrubbing tests."""

from roboquest.middleware.logging import mask_email, scrub_learner_data


def test_mask_email_keeps_first_letter_and_domain():
    assert mask_email("ada@example.com") == "a***@example.com"
    assert mask_email("not-an-email") == "***"


def test_scrub_masks_contacts_and_drops_secrets():
    event = {
        "event": "user_created",
        "user_id": "u1",
        "email": "ada@example.com",
        "parent_email": "parent@example.com",
        "password": "secret123",
        "birth_date": "2015-04-01",
    }
    scrubbed = scrub_learner_data(None, "info", event)
    assert scrubbed == {
        "event": "user_created",
        "user_id": "u1",
        "email": "a***@example.com",
        "parent_email": "p***@example.com",
    }


def test_scrub_leaves_missing_parent_email_alone():
    event = {"event": "user_created", "parent_email": None}
    assert scrub_learner_data(None, "info", event) == {"event": "user_created", "parent_email": None}
