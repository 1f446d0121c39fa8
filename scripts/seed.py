"""Database seeder: recreates the schema and loads development data."""
import argparse
import asyncio
import random
import time
from datetime import datetime, timedelta, timezone

from news_api.database import engine, async_session, Base
from news_api.models import Article, Comment, Topic, User

TOPICS = {
    "coding": "Code is love, code is life",
    "football": "FOOTIE!",
    "cooking": "Hey good looking, what you got cooking?",
}

USERNAMES = ["tickle122", "grumpy19", "happyamy2016", "cooljmessy",
             "weegembump", "jessjelly"]

SENTENCES = [
    "This is a part of the site I keep coming back to.",
    "Nobody expected the results to be this clear.",
    "There is more to this than first meets the eye.",
    "I tried it at home and it worked surprisingly well.",
    "The community has strong opinions on this one.",
]


def _paragraph(n: int) -> str:
    return " ".join(random.choice(SENTENCES) for _ in range(n))


async def seed(num_articles: int, max_comments: int) -> None:
    print(f"Seeding: {len(TOPICS)} topics, {len(USERNAMES)} users, {num_articles} articles")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        session.add_all(Topic(slug=s, description=d) for s, d in TOPICS.items())
        session.add_all(
            User(
                username=u,
                name=u.rstrip("0123456789").title(),
                avatar_url=f"https://example.com/avatars/{u}.png",
            )
            for u in USERNAMES
        )
        await session.flush()

        now = datetime.now(timezone.utc)
        articles = []
        for i in range(num_articles):
            topic = random.choice(list(TOPICS))
            article = Article(
                title=f"{topic.title()} notes #{i + 1}",
                body=_paragraph(8),
                topic=topic,
                author=random.choice(USERNAMES),
                votes=random.randint(0, 100),
                created_at=now - timedelta(days=random.randint(0, 365), minutes=i),
            )
            session.add(article)
            articles.append(article)
        await session.flush()

        total_comments = 0
        for article in articles:
            for _ in range(random.randint(0, max_comments)):
                session.add(Comment(
                    body=_paragraph(2),
                    author=random.choice(USERNAMES),
                    article_id=article.article_id,
                    votes=random.randint(-5, 20),
                    created_at=article.created_at + timedelta(hours=random.randint(1, 240)),
                ))
                total_comments += 1

        await session.commit()

    await engine.dispose()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Articles: {num_articles}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the news database")
    parser.add_argument("--articles", type=int, default=36, help="Number of articles to create")
    parser.add_argument("--max-comments", type=int, default=10, help="Upper bound of comments per article")
    args = parser.parse_args()
    asyncio.run(seed(args.articles, args.max_comments))


if __name__ == "__main__":
    main()
