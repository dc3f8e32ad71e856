import random
import pytest

from game import Deck, ContentLibrary, ContentExhausted
from game.deck import read_card_file


def test_draw_pops_from_the_top():
    deck = Deck('answer', ['a', 'b', 'c'])
    assert deck.draw() == 'c'
    assert deck.draw() == 'b'
    assert deck.draw_pile == ['a']


def test_discard_appends():
    deck = Deck('answer', [])
    deck.discard('x')
    deck.discard('y')
    assert deck.discard_pile == ['x', 'y']
    assert len(deck) == 2


def test_reshuffle_only_when_draw_pile_is_empty():
    deck = Deck('answer', ['a'], random.Random(7))
    deck.discard('x')
    deck.discard('y')

    assert deck.draw() == 'a'
    # Discards untouched until a draw finds the pile empty
    assert deck.discard_pile == ['x', 'y']

    card = deck.draw()
    assert card in ('x', 'y')
    assert deck.discard_pile == []
    assert len(deck.draw_pile) == 1


def test_reshuffle_moves_every_discard():
    deck = Deck('question', [], random.Random(3))
    deck.discard_all(['q1', 'q2', 'q3', 'q4'])
    drawn = [deck.draw() for _ in range(4)]
    assert sorted(drawn) == ['q1', 'q2', 'q3', 'q4']
    assert len(deck) == 0


def test_draw_from_empty_deck_raises():
    deck = Deck('answer', [])
    with pytest.raises(ContentExhausted):
        deck.draw()


def test_read_card_file_skips_blank_lines_and_keeps_duplicates(tmp_path):
    path = tmp_path / 'answers.txt'
    path.write_text("One\n\n  Two  \nOne\n", encoding='utf-8')
    assert read_card_file(str(path)) == ['One', 'Two', 'One']


def test_content_library_loads_both_variants(tmp_path):
    (tmp_path / 'questions.txt').write_text("Full Q %s\n", encoding='utf-8')
    (tmp_path / 'answers.txt').write_text("Full A1\nFull A2\n", encoding='utf-8')
    (tmp_path / 'clean-questions.txt').write_text("Clean Q %s\n", encoding='utf-8')
    (tmp_path / 'clean-answers.txt').write_text("Clean A1\n", encoding='utf-8')

    library = ContentLibrary.from_directory(str(tmp_path))

    assert library.pool('family').answers == ('Clean A1',)
    assert library.pool('PG').questions == ('Clean Q %s',)
    assert library.pool('M').answers == ('Full A1', 'Full A2')
    # Unknown variants fall back to the restricted pool
    assert library.pool('whatever').questions == ('Clean Q %s',)


def test_missing_content_file_fails_loudly(tmp_path):
    with pytest.raises(FileNotFoundError):
        ContentLibrary.from_directory(str(tmp_path))


def test_new_decks_are_independent_copies(content):
    rng = random.Random(5)
    q1, a1 = content.new_decks('family', rng)
    q2, a2 = content.new_decks('family', rng)
    a1.draw()
    assert len(a1) == len(a2) - 1
    assert sorted(a2.draw_pile) == sorted(content.pool('family').answers)


def test_bundled_content_files_load():
    import os
    from config.settings import PROJECT_ROOT
    library = ContentLibrary.from_directory(os.path.join(PROJECT_ROOT, 'data'))
    for variant in ('family', 'full'):
        pool = library.pool(variant)
        assert pool.questions
        assert len(pool.answers) >= 20


def test_deck_with_only_discards_is_not_exhausted():
    deck = Deck('question', [], random.Random(2))
    deck.discard('q1')
    assert deck
    assert deck.draw() == 'q1'
    assert not deck
    with pytest.raises(ContentExhausted):
        deck.draw()
