"""
ProgressStore - Single owner of the learner's UserProgress.

Handles:
- Challenge completion with catalog-verified scoring
- Pattern completion, streaks and achievements derived on every change
- Timed challenge sessions
- Persisting each new snapshot through a ProgressStorage
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional

from patternhub.schemas import DesignPattern, GameSession, PatternCatalog, UserProgress

from .achievements import AchievementEvaluator
from .storage import ProgressStorage


logger = logging.getLogger(__name__)


class ProgressUpdateError(ValueError):
    """A progress update was rejected; no state was changed."""


class UnknownPatternError(ProgressUpdateError):
    def __init__(self, pattern_id: str):
        super().__init__(f"Unknown pattern: {pattern_id}")
        self.pattern_id = pattern_id


class UnknownChallengeError(ProgressUpdateError):
    def __init__(self, challenge_id: str):
        super().__init__(f"Unknown challenge: {challenge_id}")
        self.challenge_id = challenge_id


class ChallengeMismatchError(ProgressUpdateError):
    def __init__(self, pattern_id: str, challenge_id: str, owner_id: str):
        super().__init__(
            f"Challenge {challenge_id} belongs to pattern {owner_id}, not {pattern_id}"
        )
        self.pattern_id = pattern_id
        self.challenge_id = challenge_id


class PointsMismatchError(ProgressUpdateError):
    def __init__(self, challenge_id: str, points: int, expected: int):
        super().__init__(
            f"Challenge {challenge_id} is worth {expected} points, not {points}"
        )
        self.challenge_id = challenge_id
        self.points = points
        self.expected = expected


def next_streak(progress: UserProgress, today: date) -> tuple[int, Optional[date]]:
    """
    Streak and last activity date after activity on `today`.

    Returns:
        Tuple of (current_streak, last_activity_date)
    """
    last = progress.last_activity_date
    if last is None:
        return 1, today

    gap = (today - last).days
    if gap < 0:
        # Clock went backwards; keep the recorded day
        return progress.current_streak, last
    if gap == 0:
        return max(progress.current_streak, 1), last
    if gap == 1:
        return progress.current_streak + 1, today
    return 1, today


class ProgressStore:
    """
    In-memory authoritative progress state.

    Every mutation builds a new UserProgress snapshot, saves it through
    the storage adapter, then replaces the current snapshot. Readers only
    ever see whole snapshots.
    """

    def __init__(
        self,
        catalog: PatternCatalog,
        storage: ProgressStorage,
        evaluator: Optional[AchievementEvaluator] = None,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the store and hydrate it from storage.

        Args:
            catalog: Pattern catalog, the source of truth for scoring
            storage: Persistence adapter
            evaluator: Achievement evaluator (default: standard rules)
            today: Calendar source for streaks
            now: Clock for session timing
        """
        self.catalog = catalog
        self.storage = storage
        self.evaluator = evaluator or AchievementEvaluator(catalog)
        self._today = today
        self._now = now
        self._session: Optional[GameSession] = None
        self._progress = self._reconcile(storage.load())

    @property
    def user_progress(self) -> UserProgress:
        """Current immutable snapshot."""
        return self._progress

    @property
    def current_session(self) -> Optional[GameSession]:
        return self._session

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    def _derive(self, challenges_completed: tuple[str, ...], **fields) -> UserProgress:
        """Build a snapshot whose derived fields match challenges_completed."""
        completed = set(challenges_completed)
        patterns_completed = tuple(
            p.id for p in self.catalog.patterns
            if all(c in completed for c in p.challenge_ids)
        )
        total_points = sum(
            self.catalog.get_challenge(cid).points for cid in challenges_completed
        )
        draft = UserProgress(
            challenges_completed=challenges_completed,
            patterns_completed=patterns_completed,
            total_points=total_points,
            **fields,
        )
        earned = self.evaluator.evaluate(draft)
        return draft.model_copy(update={"achievements": self.evaluator.ordered_ids(earned)})

    def _reconcile(self, loaded: UserProgress) -> UserProgress:
        """Drop unknown challenge ids and recompute derived fields."""
        known = tuple(
            cid for cid in loaded.challenges_completed
            if self.catalog.get_challenge(cid) is not None
        )
        dropped = len(loaded.challenges_completed) - len(known)
        if dropped:
            logger.warning(f"Dropping {dropped} unknown challenge id(s) from stored progress")

        progress = self._derive(
            known,
            current_streak=loaded.current_streak,
            last_activity_date=loaded.last_activity_date,
            fastest_completion_seconds=loaded.fastest_completion_seconds,
        )
        if progress != loaded:
            logger.warning("Stored progress was inconsistent with the catalog; recomputed it")
        return progress

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _require_pattern(self, pattern_id: str) -> DesignPattern:
        pattern = self.catalog.get_pattern(pattern_id)
        if pattern is None:
            raise UnknownPatternError(pattern_id)
        return pattern

    def _require_challenge(self, pattern_id: str, challenge_id: str):
        self._require_pattern(pattern_id)
        challenge = self.catalog.get_challenge(challenge_id)
        if challenge is None:
            raise UnknownChallengeError(challenge_id)
        if challenge.pattern_id != pattern_id:
            raise ChallengeMismatchError(pattern_id, challenge_id, challenge.pattern_id)
        return challenge

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _commit(self, progress: UserProgress):
        self.storage.save(progress)
        self._progress = progress

    def update_progress(self, pattern_id: str, challenge_id: str, points: Optional[int] = None) -> bool:
        """
        Record the first completion of a challenge.

        Args:
            pattern_id: Pattern owning the challenge
            challenge_id: Completed challenge
            points: Points claimed by the caller; must equal the catalog value

        Returns:
            True if the completion was recorded, False if it was already recorded

        Raises:
            ProgressUpdateError: If the ids or points don't match the catalog
        """
        try:
            challenge = self._require_challenge(pattern_id, challenge_id)
            if points is not None and points != challenge.points:
                raise PointsMismatchError(challenge_id, points, challenge.points)
        except ProgressUpdateError as e:
            logger.warning(f"Rejected progress update: {e}")
            raise

        current = self._progress
        if challenge_id in current.challenges_completed:
            return False

        streak, last_activity = next_streak(current, self._today())
        fastest = current.fastest_completion_seconds
        ended = self._ended_session_for(pattern_id, challenge_id, challenge.points)
        elapsed = ended.elapsed_seconds if ended is not None else None
        if elapsed is not None:
            fastest = elapsed if fastest is None else min(fastest, elapsed)

        progress = self._derive(
            current.challenges_completed + (challenge_id,),
            current_streak=streak,
            last_activity_date=last_activity,
            fastest_completion_seconds=fastest,
        )
        self._commit(progress)
        if ended is not None:
            self._session = ended

        logger.info(
            f"Completed {challenge_id} (+{challenge.points} points, "
            f"total {progress.total_points})"
        )
        for achievement_id in set(progress.achievements) - set(current.achievements):
            logger.info(f"Achievement unlocked: {achievement_id}")
        return True

    def reset_progress(self):
        """Replace all progress with defaults and persist it."""
        self._session = None
        self._commit(self._derive(()))
        logger.info("Progress reset")

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def start_session(self, pattern_id: str, challenge_id: str) -> GameSession:
        """Start timing an attempt at a challenge, replacing any open session."""
        self._require_challenge(pattern_id, challenge_id)
        self._session = GameSession(
            pattern_id=pattern_id,
            challenge_id=challenge_id,
            started_at=self._now(),
        )
        return self._session

    def record_attempt(self) -> Optional[GameSession]:
        """Count one more attempt in the open session."""
        if self._session is None or self._session.completed:
            return self._session
        self._session = self._session.model_copy(
            update={"attempts": self._session.attempts + 1}
        )
        return self._session

    def end_session(self, score: int) -> Optional[GameSession]:
        """Mark the open session completed with a score."""
        if self._session is None or self._session.completed:
            return self._session
        self._session = self._ended(self._session, score)
        return self._session

    def _ended(self, session: GameSession, score: int) -> GameSession:
        return session.model_copy(
            update={"ended_at": self._now(), "completed": True, "score": score}
        )

    def _ended_session_for(self, pattern_id: str, challenge_id: str, score: int) -> Optional[GameSession]:
        """The session for this challenge as it looks once closed; does not store it."""
        session = self._session
        if session is None or (session.pattern_id, session.challenge_id) != (pattern_id, challenge_id):
            return None
        return session if session.completed else self._ended(session, score)
