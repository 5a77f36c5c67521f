import random
import unittest

from connect_four.game.errors import InvalidColumnError, InvalidPositionError, InvalidStateError
from connect_four.game.rules import TurnController, status_message
from connect_four.utils import GameStatus, Player, PlayerProfile

# Player 1 stacks column 0 while player 2 stacks column 1
VERTICAL_WIN_MOVES = [0, 1, 0, 1, 0, 1, 0]

# Fills a 6x7 board with no four in a row anywhere. Columns 0-3 are filled in
# pairs, then columns 4-6 together.
TIE_MOVES = (
    [0, 1, 1, 0, 1, 0, 0, 1, 0, 1, 1, 0]
    + [2, 3, 3, 2, 3, 2, 2, 3, 2, 3, 3, 2]
    + [4, 5, 6, 4, 5, 4, 5, 6, 4, 6, 4, 4, 6, 5, 6, 5, 5, 6]
)


def play(controller, moves):
    for column in moves:
        controller.drop_piece(column)
    return controller


class TestTurnController(unittest.TestCase):
    def test_initial_state(self):
        controller = TurnController()
        self.assertEqual(controller.get_status(), GameStatus.IN_PROGRESS)
        self.assertEqual(controller.get_active_player(), Player.ONE)
        self.assertFalse(controller.is_game_over())
        self.assertIsNone(controller.get_winner())
        self.assertEqual(controller.valid_columns(), list(range(7)))
        self.assertIsNone(controller.get_cell(5, 0))

    def test_drop_returns_landing_cell_and_switches_player(self):
        controller = TurnController()
        self.assertEqual(controller.drop_piece(3), (5, 3))
        self.assertEqual(controller.get_cell(5, 3), Player.ONE)
        self.assertEqual(controller.get_active_player(), Player.TWO)

        self.assertEqual(controller.drop_piece(3), (4, 3))
        self.assertEqual(controller.get_cell(4, 3), Player.TWO)
        self.assertEqual(controller.get_active_player(), Player.ONE)

    def test_turns_alternate_strictly(self):
        controller = TurnController()
        expected = Player.ONE
        for column in [0, 1, 2, 3, 4, 5, 6, 0, 1, 2]:
            self.assertEqual(controller.get_active_player(), expected)
            row, col = controller.drop_piece(column)
            self.assertEqual(controller.get_cell(row, col), expected)
            expected = expected.other()

    def test_full_column_is_ignored(self):
        controller = play(TurnController(), [0] * 6)
        self.assertEqual(controller.get_status(), GameStatus.IN_PROGRESS)
        before = controller.board.copy()

        self.assertIsNone(controller.drop_piece(0))
        self.assertEqual(controller.board, before)
        self.assertEqual(controller.get_active_player(), Player.ONE)
        self.assertEqual(len(controller.state.moves), 6)
        self.assertNotIn(0, controller.valid_columns())

    def test_invalid_column_raises_without_changing_state(self):
        controller = TurnController()
        controller.drop_piece(2)
        for column in (-1, 7):
            with self.assertRaises(InvalidColumnError):
                controller.drop_piece(column)
        self.assertEqual(controller.get_active_player(), Player.TWO)
        self.assertEqual(len(controller.state.moves), 1)

    def test_player_one_vertical_win(self):
        controller = TurnController()
        play(controller, VERTICAL_WIN_MOVES[:-1])
        self.assertEqual(controller.get_status(), GameStatus.IN_PROGRESS)

        controller.drop_piece(VERTICAL_WIN_MOVES[-1])
        self.assertEqual(controller.get_status(), GameStatus.PLAYER_ONE_WIN)
        self.assertEqual(controller.get_status(), GameStatus.won_by(Player.ONE))
        self.assertEqual(controller.get_winner(), Player.ONE)
        self.assertEqual(controller.get_winning_run(), ((2, 0), (3, 0), (4, 0), (5, 0)))
        # The winner stays the active player
        self.assertEqual(controller.get_active_player(), Player.ONE)
        self.assertEqual(controller.valid_columns(), [])

    def test_player_two_can_win(self):
        controller = play(TurnController(), [0, 1, 0, 1, 0, 1, 2, 1])
        self.assertEqual(controller.get_status(), GameStatus.PLAYER_TWO_WIN)
        self.assertEqual(controller.get_winner(), Player.TWO)

    def test_moves_after_win_are_rejected(self):
        controller = play(TurnController(), VERTICAL_WIN_MOVES)
        before = controller.board.copy()
        with self.assertRaises(InvalidStateError) as ctx:
            controller.drop_piece(4)
        self.assertEqual(ctx.exception.status, GameStatus.PLAYER_ONE_WIN)
        self.assertEqual(controller.board, before)

    def test_filling_the_board_without_a_line_is_a_tie(self):
        controller = TurnController()
        expected = Player.ONE
        for column in TIE_MOVES:
            self.assertEqual(controller.get_status(), GameStatus.IN_PROGRESS)
            self.assertEqual(controller.get_active_player(), expected)
            self.assertIsNotNone(controller.drop_piece(column))
            self.assertTrue(controller.board.satisfies_gravity())
            expected = expected.other()

        self.assertEqual(len(TIE_MOVES), 42)
        self.assertTrue(controller.board.is_full())
        self.assertEqual(controller.get_status(), GameStatus.TIED)
        self.assertIsNone(controller.get_winner())
        self.assertEqual(controller.board.count(Player.ONE), 21)
        self.assertEqual(controller.board.count(Player.TWO), 21)

        before = controller.board.copy()
        for column in range(7):
            with self.assertRaises(InvalidStateError):
                controller.drop_piece(column)
        self.assertEqual(controller.board, before)

    def test_win_takes_precedence_over_tie(self):
        controller = TurnController(height=1, width=4)
        board = controller.board
        for col in range(3):
            board.place(0, col, Player.ONE)

        controller.drop_piece(3)
        self.assertTrue(board.is_full())
        self.assertEqual(controller.get_status(), GameStatus.PLAYER_ONE_WIN)

    def test_small_board_tie(self):
        controller = play(TurnController(height=2, width=2), [0, 1, 0, 1])
        self.assertEqual(controller.get_status(), GameStatus.TIED)

    def test_random_games_keep_gravity_and_alternate(self):
        rng = random.Random(1234)
        for _ in range(25):
            controller = TurnController()
            expected = Player.ONE
            while not controller.is_game_over():
                self.assertEqual(controller.get_active_player(), expected)
                controller.drop_piece(rng.choice(controller.valid_columns()))
                self.assertTrue(controller.board.satisfies_gravity())
                expected = expected.other()

            status = controller.get_status()
            if status == GameStatus.TIED:
                self.assertTrue(controller.board.is_full())
            else:
                # Whoever moved last is the winner
                self.assertEqual(controller.get_winner(), controller.state.last_move[2])

    def test_subscribers_are_notified_after_applied_moves(self):
        controller = TurnController(height=2, width=2)
        seen = []
        unsubscribe = controller.subscribe(lambda state: seen.append(state.last_move))

        controller.drop_piece(0)
        controller.drop_piece(0)
        controller.drop_piece(0)  # full column, no notification
        self.assertEqual(seen, [(1, 0, Player.ONE), (0, 0, Player.TWO)])

        unsubscribe()
        controller.drop_piece(1)
        self.assertEqual(len(seen), 2)

    def test_failing_listener_does_not_stop_the_others(self):
        controller = TurnController()
        seen = []

        def broken(state):
            raise RuntimeError("renderer crashed")

        controller.subscribe(broken)
        controller.subscribe(lambda state: seen.append(state.last_move))

        with self.assertRaises(RuntimeError):
            controller.drop_piece(3)
        # The move stands and the later listener still ran
        self.assertEqual(controller.get_cell(5, 3), Player.ONE)
        self.assertEqual(controller.get_active_player(), Player.TWO)
        self.assertEqual(seen, [(5, 3, Player.ONE)])

    def test_get_cell_off_the_board_raises(self):
        controller = TurnController()
        controller.drop_piece(0)
        for row, col in ((-1, 0), (5, -7), (6, 0), (0, 7)):
            with self.assertRaises(InvalidPositionError):
                controller.get_cell(row, col)

    def test_subscriber_sees_terminal_state(self):
        controller = TurnController()
        statuses = []
        controller.subscribe(lambda state: statuses.append(state.status))
        play(controller, VERTICAL_WIN_MOVES)
        self.assertEqual(statuses[-1], GameStatus.PLAYER_ONE_WIN)
        self.assertEqual(len(statuses), len(VERTICAL_WIN_MOVES))

    def test_profiles_must_be_in_player_order(self):
        with self.assertRaises(ValueError):
            TurnController(profiles=(PlayerProfile(Player.TWO, "red"),
                                     PlayerProfile(Player.ONE, "blue")))
        controller = TurnController(profiles=(PlayerProfile(Player.ONE, "green"),
                                              PlayerProfile(Player.TWO, "blue")))
        self.assertEqual(controller.profile_for(Player.TWO).color, "blue")


class TestStatusMessage(unittest.TestCase):
    def test_messages(self):
        self.assertEqual(status_message(GameStatus.PLAYER_ONE_WIN), "Player 1 wins!")
        self.assertEqual(status_message(GameStatus.PLAYER_TWO_WIN), "Player 2 wins!")
        self.assertEqual(status_message(GameStatus.TIED), "It's a tie!")
        self.assertIsNone(status_message(GameStatus.IN_PROGRESS))


if __name__ == "__main__":
    unittest.main()
