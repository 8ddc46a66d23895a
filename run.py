import asyncio
import time

from dotenv import load_dotenv
import hydra
from hydra.utils import instantiate
from loguru import logger
from omegaconf import DictConfig

from pokerank.categories import CATEGORIES
from pokerank.roster.models import CreatureRecord
from pokerank.tournament.engine import TournamentEngine
from pokerank.tournament.session import TournamentSession
from pokerank.tournament.state import TournamentPhase, TournamentState
from pokerank.utils.logger_setup import setup_logger


async def ask(prompt: str) -> str:
    return (await asyncio.to_thread(input, prompt)).strip().lower()


def describe(creature: CreatureRecord, highlight: bool = True) -> str:
    stages = [
        f"[{name}]" if highlight and name == creature.name else name
        for name in creature.lineage_names()
    ]
    line = " -> ".join(stages) if stages else "no evolution data"
    return f"{creature.name:<16} {line}"


def print_results(session: TournamentSession) -> None:
    print("\nResults")
    print(f"{'category':<10} {'1st':<16} {'2nd':<16} {'3rd':<16}")
    for category, ranking in session.results.items():
        cells = [c.name for c in ranking] + ["N/A"] * (3 - len(ranking))
        print(f"{category:<10} " + " ".join(f"{cell:<16}" for cell in cells[:3]))


async def choose_category(preset: str | None) -> str | None:
    if preset:
        return preset
    print("\nCategories: " + ", ".join(CATEGORIES))
    answer = await ask("Category (empty to quit): ")
    return answer or None


async def play_round(engine: TournamentEngine, state: TournamentState) -> bool:
    """Run pairs until the tournament ends. Returns False if the user quit."""
    while (pair := engine.next_pair(state)) is not None:
        first, second = pair
        print(f"\n[{state.category}] round {state.rounds + 1}, {len(state.pool)} left")
        print(f"  1) {describe(first)}")
        print(f"  2) {describe(second)}")
        answer = await ask("Favourite (1/2, q to quit): ")
        if answer == "q":
            return False
        if answer not in ("1", "2"):
            print("Please answer 1 or 2.")
            continue
        winner, loser = (first, second) if answer == "1" else (second, first)
        engine.resolve_choice(state, winner, loser)
    return True


async def run_tournament(cfg: DictConfig) -> None:
    start_time = time.time()
    engine: TournamentEngine = instantiate(cfg.engine, _recursive_=True)
    session = TournamentSession()

    try:
        preset = cfg.category
        while (category := await choose_category(preset)) is not None:
            preset = None
            state = await engine.start(session, category)
            if state.phase == TournamentPhase.NO_CONTEST:
                print(f"No valid entries found for '{category}'.")
                continue

            while True:
                if not await play_round(engine, state):
                    return
                print_results(session)
                for rank, creature in enumerate(state.ranking or [], start=1):
                    print(f"  {rank}. {describe(creature)}  ({state.scores.get(creature.name)} wins)")

                again = await ask("\n(r)eplay this category, (n)ew category, (q)uit: ")
                if again == "r":
                    engine.reset(state)
                    continue
                if again == "q":
                    return
                break

    finally:
        await engine.builder.client.aclose()
        logger.info(f"Session finished after {time.time() - start_time:.1f} seconds")


@hydra.main(version_base=None, config_path="config", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entrypoint with Hydra configuration management."""
    load_dotenv()

    log_file_path = setup_logger(
        log_dir=cfg.logging.log_dir,
        level=cfg.logging.level,
        rotation=cfg.logging.rotation,
        retention=cfg.logging.retention,
    )
    logger.info(f"Log file: {log_file_path}")
    try:
        asyncio.run(run_tournament(cfg))
    except KeyboardInterrupt:
        logger.info("Tournament interrupted by user")


if __name__ == "__main__":
    main()
