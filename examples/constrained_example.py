"""Bead on a circle, advanced off-thread through the physics worker."""

import numpy as np

from manifold_sim.io import PhysicsWorker
from manifold_sim.physics.simulator import StepRequest
from manifold_sim.presets import CircleConstraint

def main():
    """Swing a bead around the unit circle and watch the constraint residual."""
    config, state = CircleConstraint().generate()
    
    with PhysicsWorker(config) as worker:
        offset = 0
        reference = None
        for batch in range(5):
            request = StepRequest(
                state,
                dt=0.002,
                step_count=200,
                log_interval=100,
                step_offset=offset,
                reference_energy=reference
            )
            response = worker.result(worker.advance(request))
            if response is None:
                continue
            
            state = response.final_state
            reference = response.reference_energy
            offset += response.steps_completed
            
            radius = np.hypot(*state.q)
            for sample in response.energy_log:
                print(f"Step {sample.step_index}: E={sample.energy:.6f}, "
                      f"dE/E0={sample.relative_error:.2e}")
            print(f"  |q| - 1 = {radius - 1:.2e}, faults: {list(response.faults) or 'none'}")
    
    print("Simulation complete!")

if __name__ == "__main__":
    main()
