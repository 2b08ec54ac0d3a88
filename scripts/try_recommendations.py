#!/usr/bin/env python3
"""
Escape Zone manual check script

Calls the real Gemini API through the service layer, without starting the
server or the UI. Requires GOOGLE_API_KEY.

Usage:
    python scripts/try_recommendations.py
    python scripts/try_recommendations.py --category Anime --genre Action --year 2020
    python scripts/try_recommendations.py --advice "Study Abroad Guide"
    python scripts/try_recommendations.py --chat "Best sci-fi anime for beginners?"
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from escapezone.schemas.recommendations import RecommendationItem
from escapezone.services.advice_service import get_advice
from escapezone.services.cache import ResponseCache
from escapezone.services.chat_service import ChatSession
from escapezone.services.gemini_client import get_gemini_client
from escapezone.services.recommendation_service import get_recommendations
from escapezone.services.retry import classify_error

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_recommendations(items: List[RecommendationItem]) -> None:
    print("\n" + "=" * 60)
    print(f"RESULTS: {len(items)}")
    print("=" * 60)

    if not items:
        print("\n❌ No results (empty or unparseable response)\n")
        return

    for i, item in enumerate(items, 1):
        print(f"--- #{i} {item.title} ({item.releaseYear}) ---")
        print(f"  Type:      {item.type}")
        print(f"  IMDb:      {item.ratingIMDb}")
        print(f"  RT:        {item.ratingRottenTomatoes}")
        print(f"  Genres:    {', '.join(item.genres)}")
        print(f"  Trailer:   {item.trailerUrl}")
        print(f"  Image:     {item.display_image_url}")
        print(f"  {item.description}")
        print()


async def run_recommendations(
    category: str,
    query: Optional[str],
    genre: Optional[str],
    year: Optional[str],
) -> None:
    print(f"\nCategory: {category} | Genre: {genre} | Year: {year} | Query: {query or '-'}")
    print("Calling Gemini API...")

    try:
        items = await get_recommendations(
            get_gemini_client(), ResponseCache(), category, query=query, genre=genre, year=year
        )
    except Exception as e:
        print(f"\n❌ {classify_error(e).value}: {e}\n")
        return

    print_recommendations(items)


async def run_advice(topic: str) -> None:
    print(f"\nTopic: {topic}\nCalling Gemini API...\n")
    print(await get_advice(get_gemini_client(), ResponseCache(), topic))


async def run_chat(message: str) -> None:
    session = ChatSession()
    await session.send(get_gemini_client(), message)
    for turn in session.transcript:
        print(f"\n[{turn.role}] {turn.text}")


def main():
    parser = argparse.ArgumentParser(
        description="Try the Escape Zone Gemini services locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--category", "-c", type=str, default="Movies", help="Movies, Web-Series or Anime")
    parser.add_argument("--query", "-q", type=str, help="Free-text search")
    parser.add_argument("--genre", "-g", type=str, default="All", help="Genre filter (default: All)")
    parser.add_argument("--year", "-y", type=str, default="All", help="Year or decade (default: All)")
    parser.add_argument("--advice", "-a", type=str, help="Get advice for this topic instead")
    parser.add_argument("--chat", type=str, help="Send one chat message instead")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if not os.getenv("GOOGLE_API_KEY"):
        print("\n⚠️  ERROR: GOOGLE_API_KEY environment variable not set!")
        print("   Get your API key at: https://aistudio.google.com/app/apikey")
        sys.exit(1)

    if args.advice:
        asyncio.run(run_advice(args.advice))
    elif args.chat:
        asyncio.run(run_chat(args.chat))
    else:
        asyncio.run(run_recommendations(args.category, args.query, args.genre, args.year))


if __name__ == "__main__":
    main()
