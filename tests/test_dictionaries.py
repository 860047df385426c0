from __future__ import annotations

from core.domain.models import TweetResponse, UserResponse

TWEET_PAYLOAD = {
    "data": [
        {
            "id": "100",
            "text": "@TwitterDev look at this",
            "author_id": "1",
            "in_reply_to_user_id": "2",
            "attachments": {"media_keys": ["3_1", "3_missing"], "poll_ids": ["p1"]},
            "geo": {"place_id": "pl1"},
            "entities": {
                "mentions": [
                    {"start": 0, "end": 11, "username": "TwitterDev"},
                    {"start": 12, "end": 20, "username": "unknown"},
                ]
            },
            "referenced_tweets": [
                {"type": "quoted", "id": "200"},
                {"type": "replied_to", "id": "404"},
            ],
        }
    ],
    "includes": {
        "users": [
            {"id": "1", "username": "author"},
            {"id": "2", "username": "TwitterDev"},
        ],
        "media": [{"media_key": "3_1", "type": "photo"}],
        "polls": [{"id": "p1", "options": [{"position": 1, "label": "yes", "votes": 3}]}],
        "places": [{"id": "pl1", "full_name": "Manhattan, NY"}],
        "tweets": [
            {
                "id": "200",
                "text": "quoted",
                "author_id": "2",
                "referenced_tweets": [{"type": "quoted", "id": "100"}],
            }
        ],
    },
}


def test_tweet_dictionary_resolves_includes() -> None:
    response = TweetResponse.model_validate(TWEET_PAYLOAD)

    dictionary = response.tweet_dictionaries()["100"]

    assert dictionary.author.username == "author"
    assert dictionary.in_reply_user.username == "TwitterDev"
    assert dictionary.place.full_name == "Manhattan, NY"
    assert [m.media_key for m in dictionary.attachment_media] == ["3_1"]
    assert dictionary.attachment_polls[0].options[0].votes == 3
    assert [m.user.id for m in dictionary.mentions] == ["2"]


def test_referenced_tweets_resolve_one_level() -> None:
    response = TweetResponse.model_validate(TWEET_PAYLOAD)

    references = response.tweet_dictionaries()["100"].referenced_tweets

    assert len(references) == 1
    quoted = references[0]
    assert quoted.reference.type == "quoted"
    assert quoted.tweet_dictionary.author.id == "2"
    assert quoted.tweet_dictionary.referenced_tweets == []


def test_tweet_dictionary_without_includes() -> None:
    response = TweetResponse.model_validate({"data": {"id": "1", "text": "alone"}})

    dictionary = response.tweet_dictionaries()["1"]

    assert dictionary.author is None
    assert dictionary.mentions == []


def test_user_dictionary_pinned_tweet() -> None:
    response = UserResponse.model_validate(
        {
            "data": [
                {"id": "1", "username": "a", "pinned_tweet_id": "10"},
                {"id": "2", "username": "b"},
            ],
            "includes": {"tweets": [{"id": "10", "text": "pinned"}]},
        }
    )

    dictionaries = response.user_dictionaries()

    assert dictionaries["1"].pinned_tweet.text == "pinned"
    assert dictionaries["2"].pinned_tweet is None
