"""Database seeder for local development of the News API."""
import argparse
import asyncio
import random
import time
from datetime import datetime, timedelta, timezone

from app.database import async_session, engine, init_models
from app.models import Article, Comment, Topic, User

TOPICS = {
    "coding": "Code is love, code is life",
    "football": "FOOTIE!",
    "cooking": "Hey good looking, what you got cooking?",
}

USERS = [
    ("tickle122", "Tom Tickle"),
    ("grumpy19", "Paul Grump"),
    ("happyamy2016", "Amy Happy"),
    ("cooljmessy", "Peter Messy"),
    ("weegembump", "Gemma Bump"),
    ("jessjelly", "Jess Jelly"),
]


async def seed(small: bool = False, rng_seed: int | None = None):
    rng = random.Random(rng_seed)
    num_articles = 12 if small else 500
    max_comments_per_article = 3 if small else 20

    print(f"Seeding: {len(TOPICS)} topics, {len(USERS)} users, {num_articles} articles")
    start = time.perf_counter()

    await init_models(engine, drop=True)

    async with async_session() as session:
        session.add_all(Topic(slug=slug, description=desc) for slug, desc in TOPICS.items())
        session.add_all(
            User(
                username=username,
                name=name,
                avatar_url=f"https://avatars.example.com/{username}.png",
            )
            for username, name in USERS
        )
        await session.flush()
        print(f"  Created {len(TOPICS)} topics and {len(USERS)} users")

        now = datetime.now(timezone.utc)
        articles = []
        for i in range(num_articles):
            topic = rng.choice(list(TOPICS))
            article = Article(
                title=f"Notes on {topic}, part {i + 1}",
                body=f"Everything worth knowing about {topic}. " * rng.randint(3, 12),
                topic=topic,
                author=rng.choice(USERS)[0],
                votes=rng.randint(-10, 100),
                created_at=now - timedelta(days=rng.randint(0, 365), minutes=i),
            )
            session.add(article)
            articles.append(article)
        await session.flush()
        print(f"  Created {len(articles)} articles")

        total_comments = 0
        for article in articles:
            for _ in range(rng.randint(0, max_comments_per_article)):
                session.add(
                    Comment(
                        body=f"Thoughts on article {article.article_id}.",
                        author=rng.choice(USERS)[0],
                        article_id=article.article_id,
                        votes=rng.randint(-5, 30),
                        created_at=article.created_at + timedelta(hours=rng.randint(1, 500)),
                    )
                )
                total_comments += 1
        await session.commit()

    await engine.dispose()
    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s ({total_comments} comments)")


def main():
    parser = argparse.ArgumentParser(description="Seed the news database")
    parser.add_argument("--small", action="store_true", help="Use the small dataset (12 articles)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small, rng_seed=args.seed))


if __name__ == "__main__":
    main()
