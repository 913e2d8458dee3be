from flare_edge.main import run

run()
