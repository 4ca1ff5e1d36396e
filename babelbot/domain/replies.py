"""Fixed reply texts."""

HELP = (
    "I will respond to the following messages:\n"
    "`bot hi` for a simple message.\n"
    "`2es` or `⇒ru` or `to en` for a translation to a desired language.\n"
    "`@<your bot's name>` to demonstrate detecting a mention.\n"
    "`bot help` to see this again."
)

DIRECT_MESSAGE_NOTE = "It's nice to talk to you directly."
MENTION_ACK = "You really do care about me. :heart:"


def greeting(user_id: str) -> str:
    return f"Hello <@{user_id}>. Qué tal?\n{HELP}"


def not_understood(user_id: str) -> str:
    return f"Sorry <@{user_id}>, I don't understand.\n{HELP}"


def invite_thanks() -> str:
    return f"Thanks for the invite! I don't do much yet, but {HELP}"
