import asyncio
import os
from typing import List

from firesmart import FacilityImage, ReportStatus, Workspace, Zone


async def main() -> None:
    workspace = Workspace(api_key=os.environ["GEMINI_API_KEY"])
    session = workspace.session

    @session.zones.on_change
    def on_zones_change(zones: List[Zone]) -> None:
        print("Zones:", ", ".join(z.name for z in zones))

    @session.on_status_change
    def on_status_change(status: ReportStatus) -> None:
        print("Report status changed to {}".format(status))

    @session.on_error
    def on_error(message: str | None) -> None:
        if message is not None:
            print("Error:", message)

    workspace.orchestrator.load_image(FacilityImage.from_path("floor_plan.png"))
    await workspace.orchestrator.detect_zones()
    await workspace.orchestrator.find_safe_zone("50kg Calcium Carbide")
    report = await workspace.orchestrator.generate_report()
    if report is not None:
        print(report)


if __name__ == "__main__":
    asyncio.run(main())
