"""Ad Automator - daily vertical video ads from a single master prompt.

For every day of a month the pipeline writes a 3-segment script, narrates
it, pulls matching stock footage, burns in captions and concatenates the
segments into one MP4 per day.

Example usage:
    from ad_automator.video.pipeline import BatchOrchestrator, BatchRequest

    orchestrator = BatchOrchestrator.from_settings()
    async for event in orchestrator.stream(BatchRequest(project_id="abc123", year=2026, month=11)):
        print(event.to_json())
"""

__version__ = "0.1.0"
