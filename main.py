from app.results_scraper.run import main

if __name__ == "__main__":
    # Settings come from RESULTS_* environment variables; flags override them.
    raise SystemExit(main())
