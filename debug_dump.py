import sys, json, time, asyncio
from pathlib import Path
from valueproxy.config import settings
from valueproxy.parsers.pipeline import load_document, run_pipeline
from valueproxy.providers.rolimons import fetch_player_page

async def dump(user_id, fetch=fetch_player_page, out_dir=None):
    page = await fetch(user_id)
    out = Path(out_dir or settings.debug_dir)
    out.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y%m%d_%H%M%S")
    base = out / f"player_{user_id}_{ts}"
    Path(f"{base}.html").write_text(page.html or "", "utf-8")
    result = run_pipeline(load_document(page.html))
    report = {
        "status": page.status,
        "url": page.url,
        "totalValue": result.total,
        "fallback": result.fallback,
        "records": [r.to_dict() for r in result.records],
    }
    Path(f"{base}_records.json").write_text(json.dumps(report, ensure_ascii=False, indent=2), "utf-8")
    return base, report

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: python debug_dump.py <userId>")
        sys.exit(1)
    base, report = asyncio.run(dump(argv[0]))
    print(f"HTTP {report['status']} total={report['totalValue']} records={len(report['records'])}")
    print(f"Saved {base}.html and {base}_records.json")

if __name__ == "__main__":
    main()
