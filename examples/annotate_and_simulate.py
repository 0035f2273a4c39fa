import asyncio
import os

from firesmart import FacilityImage, PointerDown, Workspace


async def main() -> None:
    workspace = Workspace(api_key=os.environ["GEMINI_API_KEY"])
    workspace.orchestrator.load_image(FacilityImage.from_path("floor_plan.png"))

    # Drop two pins on an 800x600 rendering of the floor plan
    editor = workspace.editor
    for (x, y), name, inventory in [
        ((120, 90), "Solvent Store", "200L Acetone, 50L Toluene"),
        ((520, 410), "Oxidizer Cage", "Sodium chlorate"),
    ]:
        editor.handle_pointer(PointerDown(offset_x=x, offset_y=y, width=800, height=600))
        editor.form.name = name
        editor.form.inventory = inventory
        editor.submit()

    # Select the burning room and run the spread simulation
    selection = workspace.selection
    selection.start()
    solvent_store = next(iter(workspace.session.zones))
    selection.toggle(solvent_store.id)
    simulation = await selection.execute()
    if simulation is None:
        print("Simulation failed:", workspace.session.error_message)
        return

    print("Entry:", simulation.entry_route.entry_point)
    for impact in simulation.propagation:
        print(
            "{} -> {} ({})".format(
                impact.zone_name, impact.impact_type.value, impact.eta_text
            )
        )


if __name__ == "__main__":
    asyncio.run(main())
