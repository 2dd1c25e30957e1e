from lol_match_crawler.main import run

run()
