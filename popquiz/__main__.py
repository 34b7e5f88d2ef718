from popquiz.cli import run

run()
