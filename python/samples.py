"""
Published example inputs for each puzzle variant, with their known answers.
"""

REINDEER_MAZE = """
###############
#.......#....E#
#.#.###.#.###.#
#.....#.#...#.#
#.###.#####.#.#
#.#.#.......#.#
#.#.#####.###.#
#...........#.#
###.#.#####.#.#
#...#.....#.#.#
#.#.#.###.#.#.#
#.....#...#.#.#
#.###.#.#.#.#.#
#S..#.....#...#
###############
"""

REINDEER_MAZE_LARGER = """
#################
#...#...#...#..E#
#.#.#.#.#.#.#.#.#
#.#.#.#...#...#.#
#.#.#.#.###.#.#.#
#...#.#.#.....#.#
#.#.#.#.#.#####.#
#.#...#.#.#.....#
#.#.#####.#.###.#
#.#.#.......#...#
#.#.###.#####.###
#.#.#...#.....#.#
#.#.#.#####.###.#
#.#.#.........#.#
#.#.#.#########.#
#S#.............#
#################
"""

CRUCIBLE = """
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
"""

CRUCIBLE_ULTRA = """
111111111111
999999999991
999999999991
999999999991
999999999991
"""

HILL = """
Sabqponm
abcryxxl
accszExk
acctuvwj
abdefghi
"""

MEMORY = """
5,4
4,2
4,5
3,0
2,1
6,3
2,4
1,5
0,6
3,3
2,6
5,1
1,2
5,5
2,5
6,5
1,4
0,4
6,4
1,1
6,1
1,0
0,5
1,6
2,0
"""

# Memory sample grid size and bytes fallen for part 1
MEMORY_SIZE = 7
MEMORY_FALLEN = 12

# (puzzle, sample, part) -> answer
ANSWERS = {
    ("reindeer-maze", "REINDEER_MAZE", 1): 7036,
    ("reindeer-maze", "REINDEER_MAZE", 2): 45,
    ("reindeer-maze", "REINDEER_MAZE_LARGER", 1): 11048,
    ("reindeer-maze", "REINDEER_MAZE_LARGER", 2): 64,
    ("crucible", "CRUCIBLE", 1): 102,
    ("crucible", "CRUCIBLE", 2): 94,
    ("crucible", "CRUCIBLE_ULTRA", 2): 71,
    ("hill-climb", "HILL", 1): 31,
    ("hill-climb", "HILL", 2): 29,
}
