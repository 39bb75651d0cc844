"""Review session builder for lyricloop.

This module assembles review sessions (quiz, matching, sentence building,
fill-in-the-blank or a mix of them) from a learner's due vocabulary.
"""

import math
import random

from lyricloop.config import SessionSettings
from lyricloop.interfaces.storage import VocabularyStorageInterface
from lyricloop.logging import get_logger
from lyricloop.models.session import (
    ExerciseType,
    ExerciseUnit,
    FillBlankExercise,
    MatchCard,
    MatchingExercise,
    QuizExercise,
    SentenceExercise,
    SessionMix,
)
from lyricloop.models.vocabulary import VocabularyItem
from lyricloop.utils.normalize import answer_key

__all__ = [
    "SessionBuilder",
]

logger = get_logger(__name__)

_MIN_CONTEXT_WORDS = 2
_MIN_BLANK_WORD_LENGTH = 3


class SessionBuilder:
    """Builds review sessions from due vocabulary items.

    A session never contains more units than there are due items and is
    never padded with items that are not due; an empty due set yields an
    empty session ("all caught up").

    Mixed sessions use fixed proportions (50% quiz, 20% matching, 15%
    sentence, 15% fill-in-the-blank by default); integer rounding
    leftovers go to quiz. A unit that its item cannot support (no lyric
    context, too few items to match) falls back to a quiz question.

    Distractors come from the learner's other vocabulary in the same
    language first, then from a configurable generic word list.

    Example:
        builder = SessionBuilder(storage, rng=random.Random(7))
        units = await builder.build_session(due_items, 10, SessionMix.MIXED)
    """

    def __init__(
        self,
        storage: VocabularyStorageInterface,
        settings: SessionSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize builder with dependencies.

        Args:
            storage: Storage interface, used for the distractor pool
            settings: Session settings
            rng: Random source for shuffling (seed it for reproducible sessions)
        """
        self._storage = storage
        self._settings = settings or SessionSettings()
        self._rng = rng or random.Random()

    async def build_session(
        self,
        due_items: list[VocabularyItem],
        session_size: int,
        mix: SessionMix = SessionMix.QUIZ,
    ) -> list[ExerciseUnit]:
        """Assemble a session from due items.

        Args:
            due_items: Due items, most overdue first
            session_size: Requested number of items to exercise
            mix: Session composition

        Returns:
            Exercise units; empty when nothing is due
        """
        items = due_items[: max(0, session_size)]
        if not items:
            return []

        units: list[ExerciseUnit] = []
        if mix == SessionMix.MATCHING:
            size = self._settings.matching_pairs
            for index, start in enumerate(range(0, len(items), size)):
                group = items[start : start + size]
                if len(group) < 2:
                    units.append(await self._quiz(f"quiz-{index}", group[0]))
                else:
                    units.append(self._matching(f"matching-{index}", group))
        else:
            plan = self.plan_exercise_types(len(items), mix)
            for index, (exercise_type, item) in enumerate(zip(plan, items, strict=True)):
                units.append(await self._build_unit(exercise_type, index, item, items))

        logger.debug(
            "session_built",
            mix=str(mix),
            due_count=len(due_items),
            unit_count=len(units),
        )
        return units

    def plan_exercise_types(self, count: int, mix: SessionMix) -> list[ExerciseType]:
        """Decide the exercise type of each unit.

        Args:
            count: Number of units
            mix: Session composition

        Returns:
            One ExerciseType per unit (shuffled for mixed sessions)
        """
        if count <= 0:
            return []
        if mix != SessionMix.MIXED:
            return [ExerciseType(mix.value)] * count

        s = self._settings
        counts = {
            ExerciseType.QUIZ: math.floor(count * s.quiz_share),
            ExerciseType.MATCHING: math.floor(count * s.matching_share),
            ExerciseType.SENTENCE: math.floor(count * s.sentence_share),
            ExerciseType.FILL_BLANK: math.floor(count * s.fill_blank_share),
        }
        counts[ExerciseType.QUIZ] += count - sum(counts.values())

        plan = [exercise_type for exercise_type, n in counts.items() for _ in range(n)]
        self._rng.shuffle(plan)
        return plan

    async def select_distractors(self, item: VocabularyItem, count: int) -> list[str]:
        """Pick wrong answers for a translation question.

        Learner vocabulary in the same language takes precedence; the
        generic word list only fills what is left. No distractor equals
        the correct answer or another distractor after normalization.

        Args:
            item: Item being asked
            count: Number of distractors wanted

        Returns:
            Up to `count` distractor translations
        """
        if count <= 0:
            return []

        others = await self._storage.list_other_vocabulary(item.owner_id, item.language, item.id)
        learner_pool = [
            other.translation
            for other in others
            if other.id != item.id and other.language == item.language
        ]
        generic_pool = list(self._settings.generic_distractors)
        self._rng.shuffle(learner_pool)
        self._rng.shuffle(generic_pool)

        seen = {answer_key(item.translation)}
        chosen: list[str] = []
        for candidate in (*learner_pool, *generic_pool):
            if len(chosen) >= count:
                break
            key = answer_key(candidate)
            if not key or key in seen:
                continue
            seen.add(key)
            chosen.append(candidate)
        return chosen

    async def _build_unit(
        self,
        exercise_type: ExerciseType,
        index: int,
        item: VocabularyItem,
        session_items: list[VocabularyItem],
    ) -> ExerciseUnit:
        unit_id = f"{exercise_type.value}-{index}"

        if exercise_type == ExerciseType.MATCHING:
            group = self._matching_group(item, session_items)
            if len(group) >= 2:
                return self._matching(unit_id, group)
        elif exercise_type == ExerciseType.SENTENCE:
            sentence = self._sentence(unit_id, item)
            if sentence is not None:
                return sentence
        elif exercise_type == ExerciseType.FILL_BLANK:
            fill_blank = await self._fill_blank(unit_id, item)
            if fill_blank is not None:
                return fill_blank

        return await self._quiz(f"quiz-{index}", item)

    async def _quiz(self, unit_id: str, item: VocabularyItem) -> QuizExercise:
        distractors = await self.select_distractors(item, self._settings.option_count - 1)
        options = [item.translation, *distractors]
        self._rng.shuffle(options)
        return QuizExercise(
            id=unit_id,
            item_ids=[item.id],
            word=item.word,
            correct_answer=item.translation,
            options=options,
            song_name=item.song_name,
        )

    def _matching_group(
        self,
        item: VocabularyItem,
        session_items: list[VocabularyItem],
    ) -> list[VocabularyItem]:
        """The unit's own item followed by the next session items, wrapping around."""
        start = session_items.index(item)
        rotated = session_items[start:] + session_items[:start]
        group: list[VocabularyItem] = []
        words: set[str] = set()
        for candidate in rotated:
            key = answer_key(candidate.word)
            if key in words:
                continue
            words.add(key)
            group.append(candidate)
            if len(group) >= self._settings.matching_pairs:
                break
        return group

    def _matching(self, unit_id: str, group: list[VocabularyItem]) -> MatchingExercise:
        left = [
            MatchCard(card_id=f"left-{i}", text=item.word, item_id=item.id)
            for i, item in enumerate(group)
        ]
        right = [
            MatchCard(card_id=f"right-{i}", text=item.translation, item_id=item.id)
            for i, item in enumerate(group)
        ]
        self._rng.shuffle(right)
        return MatchingExercise(
            id=unit_id,
            item_ids=[item.id for item in group],
            left_column=left,
            right_column=right,
        )

    def _sentence(self, unit_id: str, item: VocabularyItem) -> SentenceExercise | None:
        words = _context_words(item)
        if words is None:
            return None

        scrambled = list(words)
        self._rng.shuffle(scrambled)
        return SentenceExercise(
            id=unit_id,
            item_ids=[item.id],
            sentence=" ".join(words),
            translation=item.context_translation,
            correct_words=words,
            scrambled_words=scrambled,
        )

    async def _fill_blank(self, unit_id: str, item: VocabularyItem) -> FillBlankExercise | None:
        words = _context_words(item)
        if words is None:
            return None

        wanted = max(1, math.floor(len(words) * self._settings.blank_ratio))
        target = answer_key(item.word)
        positions: set[int] = {
            i for i, word in enumerate(words) if target and answer_key(word) == target
        }
        # Only the first occurrence of the vocabulary word is forced
        positions = {min(positions)} if positions else set()

        eligible = [
            i
            for i, word in enumerate(words)
            if i not in positions and len(answer_key(word)) >= _MIN_BLANK_WORD_LENGTH
        ]
        self._rng.shuffle(eligible)
        for i in eligible:
            if len(positions) >= wanted:
                break
            positions.add(i)
        if not positions:
            return None

        blank_positions = sorted(positions)
        answers = [words[i] for i in blank_positions]
        bank = answers + await self._word_bank_distractors(item, answers)
        self._rng.shuffle(bank)

        return FillBlankExercise(
            id=unit_id,
            item_ids=[item.id],
            words=words,
            blank_positions=blank_positions,
            answers=answers,
            word_bank=bank,
            translation=item.context_translation,
            song_name=item.song_name,
        )

    async def _word_bank_distractors(
        self,
        item: VocabularyItem,
        answers: list[str],
    ) -> list[str]:
        wanted = max(self._settings.option_count - len(answers), self._settings.min_word_bank_distractors)
        others = await self._storage.list_other_vocabulary(item.owner_id, item.language, item.id)
        pool = [other.word for other in others if other.id != item.id]
        self._rng.shuffle(pool)

        seen = {answer_key(answer) for answer in answers}
        chosen: list[str] = []
        for word in pool:
            if len(chosen) >= wanted:
                break
            key = answer_key(word)
            if not key or key in seen:
                continue
            seen.add(key)
            chosen.append(word)
        return chosen


def _context_words(item: VocabularyItem) -> list[str] | None:
    if not item.context:
        return None
    words = item.context.split()
    if len(words) < _MIN_CONTEXT_WORDS:
        return None
    return words
