from aimeswitcher.app import run

run()
